"""
charsent: 字符级情感分类前向评估流水线

将带标签的文本数据集划分为训练/测试集，按字符编码为定长向量，
经过一个冻结的随机线性单元和 sigmoid 激活后，以固定阈值计算准确率。
"""

__version__ = "0.1.0"

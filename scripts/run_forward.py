"""
前向评估脚本

用法：
	python scripts/run_forward.py --config configs/default.yaml --data last_500000_rows.csv --seed 42
"""

import os
import sys

# 允许直接以 `python scripts/run_forward.py` 运行
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from charsent.cli import main


if __name__ == '__main__':
	sys.exit(main())

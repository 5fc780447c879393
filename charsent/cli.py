"""
命令行入口

加载配置与数据，运行冻结随机权重的前向流水线，并打印训练集与测试集准确率。
"""
import logging
import sys
from pathlib import Path
from typing import List, Optional

from .core.exceptions import ExceptionHandler, SentimentPipelineException
from .core.managers.log_manager import LogManager
from .pipeline.runner import ForwardPipeline
from .utils.config import build_argparser, load_config
from .utils.logging_utils import configure_logging
from .utils.seed import resolve_seed

logger = logging.getLogger("charsent.cli")


def main(argv: Optional[List[str]] = None) -> int:
	"""
	主函数：执行前向评估流程

	Returns:
		进程退出码，0 表示成功
	"""
	parser = build_argparser()
	args = parser.parse_args(argv)

	try:
		cfg = load_config(args.config, args.override)
	except SentimentPipelineException as e:
		print(f"\nConfiguration validation failed:\n{e}")
		return 1

	configure_logging(cfg['logging']['level'])

	if args.data:
		cfg['data']['path'] = args.data
	if args.output_dir:
		cfg['logging']['output_dir'] = args.output_dir

	seed = resolve_seed(args.seed if args.seed is not None else cfg.get('seed'))
	logger.info(f"Starting program... (seed={seed})")

	output_dir = cfg['logging'].get('output_dir')
	log_manager = LogManager(output_dir=Path(output_dir)) if output_dir else None

	try:
		pipeline = ForwardPipeline(cfg, seed=seed, log_manager=log_manager)
		result = pipeline.run_from_file(cfg['data']['path'])
	except SentimentPipelineException as e:
		ExceptionHandler.handle_exception(e, logger=logger, reraise=False)
		if log_manager is not None:
			log_manager.log_error_report(ExceptionHandler.create_error_response(e))
		print(f"Error: {e.message}")
		return 1

	print(f"Training set Accuracy: {result.train.accuracy * 100:.2f}%")
	print(f"Test set Accuracy: {result.test.accuracy * 100:.2f}%")
	total = sum(result.timings.values()) + result.train.total_time + result.test.total_time
	logger.info(f"Total Execution Time: {total:.4f} seconds")
	logger.info("Program completed.")
	return 0


if __name__ == '__main__':
	sys.exit(main())

"""
PipelineComponent 基类测试
"""

import unittest
import logging
from datetime import datetime

from charsent.core.base.component import PipelineComponent, ComponentStatus
from charsent.core.exceptions import ConfigValidationError


class DummyComponent(PipelineComponent):
    """用于测试的具体实现类"""

    def _validate_config(self):
        if 'required_param' in self._config and self._config['required_param'] is None:
            raise ConfigValidationError("required_param cannot be None")

    def _initialize(self):
        self._set_status(ComponentStatus.READY)


class TestPipelineComponent(unittest.TestCase):

    def test_component_creation(self):
        """测试组件创建"""
        component = DummyComponent()

        self.assertIsNotNone(component.component_id)
        self.assertEqual(component.status, ComponentStatus.READY)
        self.assertIsInstance(component.created_at, datetime)
        self.assertIsInstance(component.logger, logging.Logger)

    def test_component_with_custom_id(self):
        component = DummyComponent(component_id="pipeline_1")
        self.assertEqual(component.component_id, "pipeline_1")
        self.assertIn("pipeline", str(component))

    def test_nested_config_access(self):
        """测试嵌套配置访问"""
        component = DummyComponent(config={"evaluation": {"threshold": 0.6}})

        self.assertEqual(component.get_config_value("evaluation.threshold"), 0.6)
        self.assertIsNone(component.get_config_value("evaluation.missing"))
        self.assertEqual(component.get_config_value("missing", "default"), "default")

    def test_config_is_copied(self):
        component = DummyComponent(config={"a": 1})
        component.config["a"] = 2
        self.assertEqual(component.get_config_value("a"), 1)

    def test_invalid_config_raises(self):
        with self.assertRaises(ConfigValidationError):
            DummyComponent(config={"required_param": None})


if __name__ == '__main__':
    unittest.main()

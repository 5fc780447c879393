from .component import PipelineComponent, ComponentStatus

__all__ = ['PipelineComponent', 'ComponentStatus']

from .lifecycle import ExperimentLifecycle

__all__ = ['ExperimentLifecycle']

from .pipeline import CollapsePipeline, PipelineReport

__all__ = [
    "CollapsePipeline",
    "PipelineReport",
]

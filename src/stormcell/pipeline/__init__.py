"""Storm detection pipeline: single-frame processing and reporting."""

from stormcell.pipeline.processor import StormProcessor, FrameResult
from stormcell.pipeline.report import format_storm_report

__all__ = ['StormProcessor', 'FrameResult', 'format_storm_report']

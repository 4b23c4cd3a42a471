"""
Services package for tvnow

Fetching, parsing, rendering and the pipeline that ties them together.
"""
from tvnow.services.document_fetcher import fetch_many, fetch_one
from tvnow.services.guide_service import GuidePipeline, show_guide
from tvnow.services.renderers import render
from tvnow.services.schedule_parser import parse_schedule

__all__ = [
    'fetch_one',
    'fetch_many',
    'parse_schedule',
    'render',
    'GuidePipeline',
    'show_guide',
]

"""Run logging helpers."""

from .jsonl import append_jsonl, layout_run_record

__all__ = ["append_jsonl", "layout_run_record"]

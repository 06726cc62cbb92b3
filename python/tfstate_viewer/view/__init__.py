"""
tfstate_viewer/view/__init__.py

Provides a convenient import interface for binding and rendering:

- binder.py for NormalizedState -> ViewModel
- grouping.py for architecture grouping rules
- labels.py for resource/instance/module labels
- render.py for text and JSON output
"""

from tfstate_viewer.view.binder import bind
from tfstate_viewer.view.grouping import group_resources
from tfstate_viewer.view.labels import instance_label, module_path_label, resource_label
from tfstate_viewer.view.render import render_json, render_text

__all__ = [
    "bind",
    "group_resources",
    "instance_label",
    "module_path_label",
    "resource_label",
    "render_json",
    "render_text",
]

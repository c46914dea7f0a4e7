"""Loaders for content, templates and translation strings."""

from eden.input_adapters.content import LoadedContent, content_key_for, load_content, load_content_file
from eden.input_adapters.exceptions import ContentParseError, InputAdapterError, TemplateParseError
from eden.input_adapters.strings import load_strings
from eden.input_adapters.templates import LoadedTemplates, load_template_file, load_templates

__all__ = [
    "ContentParseError",
    "InputAdapterError",
    "LoadedContent",
    "LoadedTemplates",
    "TemplateParseError",
    "content_key_for",
    "load_content",
    "load_content_file",
    "load_strings",
    "load_template_file",
    "load_templates",
]

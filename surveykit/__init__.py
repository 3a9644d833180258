"""Interactive terminal prompts: a filterable select list, validators, transformers and answer collection."""

__version__ = "0.1.0"
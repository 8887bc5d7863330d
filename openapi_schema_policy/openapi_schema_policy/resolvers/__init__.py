from .components_resolver import ComponentsResolver

__all__ = ["ComponentsResolver"]

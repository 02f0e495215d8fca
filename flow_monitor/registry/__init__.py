from .registry import Registry, normalize_rule_name

__all__ = ["Registry", "normalize_rule_name"]

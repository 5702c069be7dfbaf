from kit.scaffold import ScaffoldResult, Scaffolder

__all__ = ["Scaffolder", "ScaffoldResult"]

"""
JSX Splitter - Extract Component refactoring for JSX

Turns a selected piece of JSX markup into a new component file: free
identifiers become props or relocated imports, the selection is replaced by
a reference to the new component, and imports the origin file no longer
uses are removed.
"""

__version__ = "0.1.0"

# Only expose version by default - everything else is lazy loaded
__all__ = [
    "__version__",
    "JSXSplitter",
    "SplitResult",
    "InspectionResult",
    "SplitterConfig",
    "ComponentExtractor",
    "TreeSitterOracle",
]


def __getattr__(name):
    """Lazy loading of main API classes so that importing the package stays cheap."""
    if name in {"JSXSplitter", "SplitResult", "InspectionResult"}:
        from .api import InspectionResult, JSXSplitter, SplitResult

        return {
            "JSXSplitter": JSXSplitter,
            "SplitResult": SplitResult,
            "InspectionResult": InspectionResult,
        }[name]

    if name == "SplitterConfig":
        from .config import SplitterConfig

        return SplitterConfig

    if name == "ComponentExtractor":
        from .refactoring import ComponentExtractor

        return ComponentExtractor

    if name == "TreeSitterOracle":
        from .analysis import TreeSitterOracle

        return TreeSitterOracle

    raise AttributeError(f"module 'jsxsplitter' has no attribute '{name}'")

from __future__ import annotations


class BuildError(Exception):
    """Base class for errors that abort the whole build."""


class SourceDirectoryError(BuildError):
    pass


class TemplateCompileError(BuildError):
    def __init__(self, name: str, path: str, reason: str) -> None:
        super().__init__(f"Unable to compile template {name} ({path}): {reason}")
        self.name = name
        self.path = path


class LayoutNotFoundError(BuildError):
    def __init__(self, page: str, layout: str) -> None:
        super().__init__(f"Page {page} uses unknown layout: {layout}")
        self.page = page
        self.layout = layout


class UnsafePathError(BuildError):
    pass


class StaticCopyError(BuildError):
    pass


class SearchIndexError(BuildError):
    pass


class TemplateRenderError(BuildError):
    def __init__(self, page: str, layout: str, reason: str) -> None:
        super().__init__(f"Unable to render page {page} with layout {layout}: {reason}")
        self.page = page
        self.layout = layout

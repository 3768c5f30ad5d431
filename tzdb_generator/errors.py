from __future__ import annotations


class GeneratorError(RuntimeError):
    """Base class for every fatal pipeline failure."""

    stage = "generate"


class ConfigError(GeneratorError):
    stage = "config"


class FetchError(GeneratorError):
    stage = "download"


class ArchiveError(GeneratorError):
    stage = "archive"


class MissingEntryError(ArchiveError):
    def __init__(self, entry: str):
        super().__init__(f"{entry} not found in archive")
        self.entry = entry


class ParseError(GeneratorError):
    stage = "parse"

    def __init__(self, table: str, line: int, message: str):
        super().__init__(f"{table} line {line}: {message}")
        self.table = table
        self.line = line


class RenderError(GeneratorError):
    stage = "render"


class FormatError(GeneratorError):
    stage = "format"

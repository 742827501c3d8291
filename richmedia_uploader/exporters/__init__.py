"""
Exporter policies - one validator and one rewriter per authoring tool.

Adding an exporter means adding an entry to EXPORTERS; unknown or
missing identifiers resolve to the GWD policy.
"""
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Dict, Optional, Union

from ..models import Exporter
from ..protocols import IClickthroughRewriter, IExporterValidator, IFileLister, ITextReader
from .base import REDIRECT_EXPRESSION, find_root_markup
from .conversio import ConversioClickthroughRewriter, ConversioValidator
from .gwd import GWDClickthroughRewriter, GWDValidator

ValidatorFactory = Callable[[IFileLister, ITextReader, Optional[Path]], IExporterValidator]


@dataclass(frozen=True)
class ExporterPolicy:
    """Validation and rewrite strategy for one exporter."""
    exporter: Exporter
    validator_factory: ValidatorFactory
    rewriter: IClickthroughRewriter

    def build_validator(
        self,
        list_files: IFileLister,
        read_text: ITextReader,
        extract_root: Optional[Path] = None,
    ) -> IExporterValidator:
        return self.validator_factory(list_files, read_text, extract_root)


EXPORTERS: Dict[Exporter, ExporterPolicy] = {
    Exporter.GWD: ExporterPolicy(
        exporter=Exporter.GWD,
        validator_factory=lambda lister, reader, _root: GWDValidator(lister, reader),
        rewriter=GWDClickthroughRewriter(),
    ),
    Exporter.CONVERSIO: ExporterPolicy(
        exporter=Exporter.CONVERSIO,
        validator_factory=lambda lister, reader, root: ConversioValidator(lister, reader, root),
        rewriter=ConversioClickthroughRewriter(),
    ),
}

DEFAULT_EXPORTER = Exporter.GWD


def get_exporter_policy(exporter: Union[Exporter, str, None]) -> ExporterPolicy:
    """Resolve an exporter identifier to its policy, defaulting to GWD."""
    return EXPORTERS.get(Exporter.parse(exporter), EXPORTERS[DEFAULT_EXPORTER])


__all__ = [
    "EXPORTERS",
    "DEFAULT_EXPORTER",
    "REDIRECT_EXPRESSION",
    "ExporterPolicy",
    "ConversioClickthroughRewriter",
    "ConversioValidator",
    "GWDClickthroughRewriter",
    "GWDValidator",
    "find_root_markup",
    "get_exporter_policy",
]

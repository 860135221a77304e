"""
Image templates: named sources of images to convert.

A template knows where its image comes from and may adjust the conversion
options (for instance to emit only some colors). Templates are registered
under a name and selected explicitly; template files are only ever parsed
as data.
"""

import logging
from abc import ABC, abstractmethod
from collections.abc import Iterable
from dataclasses import dataclass, replace
from pathlib import Path

from constants import TEMPLATES
from utils.loader import load_image
from vectorize import ConversionOptions, IndexedImage

logger = logging.getLogger(__name__)

TEMPLATE_SUFFIXES = (".js", ".json")


class ImageTemplate(ABC):
    """Strategy providing an image and its conversion settings."""

    @property
    @abstractmethod
    def name(self) -> str:
        pass

    @property
    def description(self) -> str:
        return self.name

    @abstractmethod
    def load(self) -> IndexedImage:
        """Load the template's image."""
        pass

    def configure(self, options: ConversionOptions) -> ConversionOptions:
        """Adjust the caller's options. The default keeps them as they are."""
        return options


@dataclass(frozen=True)
class FileTemplate(ImageTemplate):
    """Template backed by a .js or .json image file."""

    path: Path
    colors: frozenset[int] | None = None
    title: str | None = None

    @property
    def name(self) -> str:
        return self.path.stem

    @property
    def description(self) -> str:
        return self.title or self.path.name

    def load(self) -> IndexedImage:
        logger.debug(f"Loading template {self.name} from {self.path}")
        return load_image(self.path)

    def configure(self, options: ConversionOptions) -> ConversionOptions:
        if self.colors is None or options.colors is not None:
            return options
        return replace(options, colors=self.colors)


_REGISTRY: dict[str, ImageTemplate] = {}


def register(template: ImageTemplate, overwrite: bool = False) -> ImageTemplate:
    if template.name in _REGISTRY and not overwrite:
        raise ValueError(f"Template already registered: {template.name}")
    _REGISTRY[template.name] = template
    return template


def unregister(name: str) -> None:
    _REGISTRY.pop(name, None)


def get_template(name: str) -> ImageTemplate:
    try:
        return _REGISTRY[name]
    except KeyError:
        available = ", ".join(available_templates()) or "none"
        raise KeyError(f"Unknown template '{name}' (available: {available})") from None


def available_templates() -> list[str]:
    return sorted(_REGISTRY)


def iter_template_files(directory: Path) -> Iterable[Path]:
    if not directory.is_dir():
        return []
    return sorted(p for p in directory.iterdir() if p.suffix in TEMPLATE_SUFFIXES)


def discover_templates(directory: Path = TEMPLATES) -> list[ImageTemplate]:
    """Register a FileTemplate for every image file of the directory."""
    found = []
    for path in iter_template_files(directory):
        template = FileTemplate(path)
        if template.name in _REGISTRY:
            logger.debug(f"Template {template.name} already registered, skipped")
            continue
        found.append(register(template))
    logger.debug(f"Discovered {len(found)} templates in {directory}")
    return found

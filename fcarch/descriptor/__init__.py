"""Archive descriptor construction and serialization."""

from .builder import DescriptorBuilder
from .models import ArchiveDescriptor

__all__ = [
    "ArchiveDescriptor",
    "DescriptorBuilder",
]

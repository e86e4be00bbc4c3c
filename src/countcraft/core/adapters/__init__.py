"""Host collaborator contracts and reference implementations."""

from .document_store import ContentStore, MarkdownVault, PropertyStore
from .metadata_index import HeadingPosition, MetadataIndex, StructuralMetadataIndex
from .renderer import MarkdownItRenderer, Renderer

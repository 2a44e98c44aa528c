from .pod import (
    ResourceRequirementsSchema,
    ContainerSchema,
    ObjectMetaSchema,
    PodSpecSchema,
    PodSchema,
    PodListSchema,
)

__all__ = [
    "ResourceRequirementsSchema",
    "ContainerSchema",
    "ObjectMetaSchema",
    "PodSpecSchema",
    "PodSchema",
    "PodListSchema",
]

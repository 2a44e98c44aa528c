from .pod import (
    ResourceRequirements,
    Container,
    ObjectMeta,
    PodSpec,
    Pod,
    PodList,
)

__all__ = [
    "ResourceRequirements",
    "Container",
    "ObjectMeta",
    "PodSpec",
    "Pod",
    "PodList",
]

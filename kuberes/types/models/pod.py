from typing import Dict, List, Optional
from kuberes.types.base import BaseModel
from kuberes.utils.quantity import cpu_milli, memory_bytes

CPU = "cpu"
MEMORY = "memory"


class ResourceRequirements(BaseModel):
    requests: Optional[Dict[str, str]]
    limits: Optional[Dict[str, str]]

    @property
    def request_cpu_milli(self) -> int:
        return cpu_milli((self.requests or {}).get(CPU))

    @property
    def request_memory_bytes(self) -> int:
        return memory_bytes((self.requests or {}).get(MEMORY))

    @property
    def limit_cpu_milli(self) -> int:
        return cpu_milli((self.limits or {}).get(CPU))

    @property
    def limit_memory_bytes(self) -> int:
        return memory_bytes((self.limits or {}).get(MEMORY))


class Container(BaseModel):
    name: str
    resources: ResourceRequirements


class ObjectMeta(BaseModel):
    name: str
    namespace: Optional[str]


class PodSpec(BaseModel):
    containers: List[Container]


class Pod(BaseModel):
    metadata: ObjectMeta
    spec: PodSpec

    @property
    def name(self) -> str:
        return self.metadata.name

    @property
    def namespace(self) -> str:
        return self.metadata.namespace or ""

    @property
    def containers(self) -> List[Container]:
        return self.spec.containers


class PodList(BaseModel):
    items: List[Pod]

    def __len__(self) -> int:
        return len(self.items)

    def __iter__(self):
        return iter(self.items)

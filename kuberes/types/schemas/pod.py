from marshmallow import fields
from kuberes.types.base import BaseSchema
from kuberes.types.models import (
    ResourceRequirements,
    Container,
    ObjectMeta,
    PodSpec,
    Pod,
    PodList,
)


class ResourceRequirementsSchema(BaseSchema):
    __model__ = ResourceRequirements

    requests = fields.Dict(
        keys=fields.Str(),
        values=fields.Raw(),
        data_key="requests",
        load_default=dict,
    )
    limits = fields.Dict(
        keys=fields.Str(),
        values=fields.Raw(),
        data_key="limits",
        load_default=dict,
    )


class ContainerSchema(BaseSchema):
    __model__ = Container

    name = fields.Str(
        data_key="name",
        required=True,
        allow_none=False,
    )
    resources = fields.Nested(
        ResourceRequirementsSchema(),
        data_key="resources",
        load_default=lambda: ResourceRequirements(requests={}, limits={}),
    )


class ObjectMetaSchema(BaseSchema):
    __model__ = ObjectMeta

    name = fields.Str(
        data_key="name",
        required=True,
        allow_none=False,
    )
    namespace = fields.Str(
        data_key="namespace",
        load_default=None,
    )


class PodSpecSchema(BaseSchema):
    __model__ = PodSpec

    containers = fields.List(
        fields.Nested(ContainerSchema()),
        data_key="containers",
        load_default=list,
    )


class PodSchema(BaseSchema):
    __model__ = Pod

    metadata = fields.Nested(
        ObjectMetaSchema(),
        data_key="metadata",
        required=True,
    )
    spec = fields.Nested(
        PodSpecSchema(),
        data_key="spec",
        load_default=lambda: PodSpec(containers=[]),
    )


class PodListSchema(BaseSchema):
    __model__ = PodList

    items = fields.List(
        fields.Nested(PodSchema()),
        data_key="items",
        load_default=list,
    )

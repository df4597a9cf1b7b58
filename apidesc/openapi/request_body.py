"""
Request body resolution.

Only one request body is modeled per operation: the first body/form
candidate in declaration order. Explicit ``Accepts`` metadata overrides
the inferred content types and payload type.
"""

from typing import Dict, Optional

from ..endpoint.metadata import Accepts, EndpointMetadata, FromBody, FromForm, VOID
from ..endpoint.signature import HandlerSignature, ParameterDescriptor
from ..patterns import RoutePattern
from .classifier import ParameterClassifier, is_file_type
from .models import MediaType, RequestBody, frozen_map
from .schema import SchemaResolver


JSON_CONTENT_TYPE = "application/json"
FORM_CONTENT_TYPE = "multipart/form-data"


class RequestBodyResolver:

    def __init__(self, classifier: ParameterClassifier, schema_resolver: SchemaResolver):
        self.classifier = classifier
        self.schema_resolver = schema_resolver

    def find_body_parameter(
        self,
        signature: HandlerSignature,
        pattern: RoutePattern,
    ) -> Optional[ParameterDescriptor]:
        # Inferred-body rules stay active here regardless of the verb.
        for parameter in signature.parameters:
            if self.classifier.classify(parameter, pattern, False).is_body_or_form:
                return parameter
        return None

    def resolve(
        self,
        signature: HandlerSignature,
        metadata: EndpointMetadata,
        pattern: RoutePattern,
    ) -> Optional[RequestBody]:
        body_parameter = self.find_body_parameter(signature, pattern)
        accepts = metadata.get_last(Accepts)

        if body_parameter is None and accepts is None:
            return None

        content: Dict[str, MediaType] = {}
        if accepts is not None:
            request_type = accepts.request_type
            if request_type is None:
                request_type = body_parameter.type if body_parameter is not None else VOID
            schema = self.schema_resolver.schema_type_for(request_type)
            for content_type in accepts.content_types:
                content[content_type] = MediaType(schema)

        if body_parameter is None:
            return RequestBody(required=not accepts.is_optional, content=frozen_map(content))

        if not content:
            content_type = FORM_CONTENT_TYPE if is_form(body_parameter) else JSON_CONTENT_TYPE
            content[content_type] = MediaType(self.schema_resolver.schema_type_for(body_parameter.type))

        return RequestBody(required=is_body_required(body_parameter), content=frozen_map(content))


def is_form(parameter: ParameterDescriptor) -> bool:
    return is_file_type(parameter.type) or parameter.has(FromForm)


def is_body_required(parameter: ParameterDescriptor) -> bool:
    from_body = parameter.find(FromBody)
    allow_empty = from_body.allow_empty if from_body is not None else False
    return not (parameter.is_optional or allow_empty)

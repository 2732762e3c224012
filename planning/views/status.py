# ============================================
# planning/views/status.py
# ============================================
from rest_framework import serializers, status
from rest_framework.response import Response
from rest_framework.views import APIView
from drf_spectacular.utils import extend_schema, extend_schema_view, inline_serializer

from planning.exceptions import EntityNotFound, Forbidden
from planning.selectors.status import StatusSelector
from planning.serializers.status import (
    StatusCreateSerializer,
    StatusOutputSerializer,
    StatusUpdateSerializer,
    TransitionCreateSerializer,
    TransitionOutputSerializer,
    TransitionValidateSerializer,
)
from planning.services.status import StatusService
from planning.views.utils import int_param, path_int, q_int, std_errors

TAGS = ["Statuses"]

ValidateResultSerializer = inline_serializer(
    name="TransitionValidateResult",
    fields={"is_valid": serializers.BooleanField()}
)


@extend_schema_view(
    get=extend_schema(
        tags=TAGS, summary="List active statuses",
        responses={200: StatusOutputSerializer(many=True), **std_errors()},
    ),
    post=extend_schema(
        tags=TAGS, summary="Create status",
        request=StatusCreateSerializer,
        responses={201: StatusOutputSerializer, **std_errors()},
    ),
)
class StatusListCreateAPIView(APIView):

    def get(self, request):
        statuses = StatusSelector.list_statuses()
        return Response(StatusOutputSerializer(statuses, many=True).data)

    def post(self, request):
        serializer = StatusCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        new_status = StatusService.create_status(**serializer.validated_data)
        return Response(StatusOutputSerializer(new_status).data, status=status.HTTP_201_CREATED)


@extend_schema_view(
    get=extend_schema(
        tags=TAGS, summary="Get status",
        parameters=[path_int("status_id", "Status ID")],
        responses={200: StatusOutputSerializer, **std_errors()},
    ),
    put=extend_schema(
        tags=TAGS, summary="Update status",
        parameters=[path_int("status_id", "Status ID")],
        request=StatusUpdateSerializer,
        responses={200: StatusOutputSerializer, **std_errors()},
    ),
    delete=extend_schema(
        tags=TAGS, summary="Delete unused status",
        parameters=[path_int("status_id", "Status ID")],
        responses={204: None, **std_errors()},
    ),
)
class StatusDetailAPIView(APIView):

    def get(self, request, status_id):
        found = StatusSelector.get_status_by_id(status_id)
        if not found:
            raise EntityNotFound('Status', status_id)
        return Response(StatusOutputSerializer(found).data)

    def put(self, request, status_id):
        serializer = StatusUpdateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        updated = StatusService.update_status(status_id=status_id, **serializer.validated_data)
        return Response(StatusOutputSerializer(updated).data)

    def delete(self, request, status_id):
        StatusService.delete_status(status_id=status_id)
        return Response(status=status.HTTP_204_NO_CONTENT)


@extend_schema(
    tags=TAGS, summary="Statuses explicitly allowed as targets",
    parameters=[path_int("status_id", "Source status ID")],
    responses={200: StatusOutputSerializer(many=True), **std_errors()},
)
class AllowedTransitionsAPIView(APIView):

    def get(self, request, status_id):
        if not StatusSelector.get_status_by_id(status_id):
            raise EntityNotFound('Status', status_id)
        targets = StatusService.allowed_transitions(status_id)
        return Response(StatusOutputSerializer(targets, many=True).data)


@extend_schema_view(
    get=extend_schema(
        tags=TAGS, summary="List transition rules",
        parameters=[q_int("from_status_id", "Only rules leaving this status")],
        responses={200: TransitionOutputSerializer(many=True), **std_errors()},
    ),
    post=extend_schema(
        tags=TAGS, summary="Create transition rule",
        request=TransitionCreateSerializer,
        responses={201: TransitionOutputSerializer, **std_errors()},
    ),
)
class TransitionListCreateAPIView(APIView):

    def get(self, request):
        transitions = StatusSelector.list_transitions(from_status_id=int_param(request, 'from_status_id'))
        return Response(TransitionOutputSerializer(transitions, many=True).data)

    def post(self, request):
        serializer = TransitionCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        transition = StatusService.create_transition(**serializer.validated_data)
        return Response(TransitionOutputSerializer(transition).data, status=status.HTTP_201_CREATED)


@extend_schema(
    tags=TAGS, summary="Check whether a status change is allowed",
    request=TransitionValidateSerializer,
    responses={200: ValidateResultSerializer, **std_errors()},
)
class TransitionValidateAPIView(APIView):

    def post(self, request):
        serializer = TransitionValidateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        is_valid = StatusService.validate_transition(
            serializer.validated_data['from_status_id'],
            serializer.validated_data['to_status_id']
        )
        return Response({'is_valid': is_valid})


@extend_schema(
    tags=TAGS, summary="Seed the default workflow (staff only)",
    request=None,
    responses={201: StatusOutputSerializer(many=True), 200: StatusOutputSerializer(many=True), **std_errors()},
)
class SeedStatusesAPIView(APIView):

    def post(self, request):
        if not request.user.is_staff:
            raise Forbidden("Only staff can seed default statuses")

        created = StatusService.seed_default_statuses()
        code = status.HTTP_201_CREATED if created else status.HTTP_200_OK
        return Response(StatusOutputSerializer(created, many=True).data, status=code)

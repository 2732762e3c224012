# ============================================
# planning/views/epic.py
# ============================================
from rest_framework.views import APIView
from rest_framework.response import Response
from rest_framework import status
from drf_spectacular.utils import extend_schema, extend_schema_view

from planning.exceptions import EntityNotFound
from planning.serializers.epic import (
    EpicCreateSerializer,
    EpicOutputSerializer,
    EpicStatusSerializer,
    EpicUpdateSerializer,
)
from planning.selectors.epic import EpicSelector
from planning.services.epic import EpicService
from planning.views.utils import DefaultPagination, actor_of, int_param, path_int, q_int, q_str, std_errors

TAGS = ["Epics"]


def _respond(epic_id, code=status.HTTP_200_OK):
    """Re-read with counts and user data, then serialize"""
    epic = EpicSelector.get_epic_by_id(epic_id)
    EpicSelector.enrich_epics_with_users([epic])
    return Response(EpicOutputSerializer(epic).data, status=code)


@extend_schema_view(
    get=extend_schema(
        tags=TAGS, summary="List epics",
        parameters=[
            q_int("project_id", "Filter by project"),
            q_int("status_id", "Filter by status"),
            q_str("assignee_id", "Filter by assignee"),
        ],
        responses={200: EpicOutputSerializer(many=True), **std_errors()},
    ),
    post=extend_schema(
        tags=TAGS, summary="Create epic",
        request=EpicCreateSerializer,
        responses={201: EpicOutputSerializer, **std_errors()},
    ),
)
class EpicListCreateAPIView(APIView):

    def get(self, request):
        filters = {
            'project_id': int_param(request, 'project_id'),
            'status_id': int_param(request, 'status_id'),
            'assignee_id': request.query_params.get('assignee_id'),
        }
        filters = {k: v for k, v in filters.items() if v is not None}

        epics = EpicSelector.get_epics_list(**filters)

        paginator = DefaultPagination()
        page = paginator.paginate_queryset(epics, request)
        page = EpicSelector.enrich_epics_with_users(list(page))

        serializer = EpicOutputSerializer(page, many=True)
        return paginator.get_paginated_response(serializer.data)

    def post(self, request):
        serializer = EpicCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        actor_id, _ = actor_of(request)
        epic = EpicService.create_epic(actor_id=actor_id, **serializer.validated_data)
        return _respond(epic.id, status.HTTP_201_CREATED)


@extend_schema_view(
    get=extend_schema(
        tags=TAGS, summary="Get epic",
        parameters=[path_int("epic_id", "Epic ID")],
        responses={200: EpicOutputSerializer, **std_errors()},
    ),
    put=extend_schema(
        tags=TAGS, summary="Update epic",
        parameters=[path_int("epic_id", "Epic ID")],
        request=EpicUpdateSerializer,
        responses={200: EpicOutputSerializer, **std_errors()},
    ),
    delete=extend_schema(
        tags=TAGS, summary="Delete epic without work items",
        parameters=[path_int("epic_id", "Epic ID")],
        responses={204: None, **std_errors()},
    ),
)
class EpicDetailAPIView(APIView):

    def get(self, request, epic_id):
        if not EpicSelector.get_epic_by_id(epic_id):
            raise EntityNotFound('Epic', epic_id)
        return _respond(epic_id)

    def put(self, request, epic_id):
        serializer = EpicUpdateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        actor_id, is_privileged = actor_of(request)
        EpicService.update_epic(epic_id=epic_id, actor_id=actor_id, is_privileged=is_privileged, **serializer.validated_data)
        return _respond(epic_id)

    def delete(self, request, epic_id):
        actor_id, is_privileged = actor_of(request)
        EpicService.delete_epic(epic_id=epic_id, actor_id=actor_id, is_privileged=is_privileged)
        return Response(status=status.HTTP_204_NO_CONTENT)


@extend_schema(
    tags=TAGS, summary="Change epic status",
    parameters=[path_int("epic_id", "Epic ID")],
    request=EpicStatusSerializer,
    responses={200: EpicOutputSerializer, **std_errors()},
)
class EpicStatusAPIView(APIView):

    def put(self, request, epic_id):
        serializer = EpicStatusSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        actor_id, is_privileged = actor_of(request)
        EpicService.change_epic_status(
            epic_id=epic_id,
            status_id=serializer.validated_data['status_id'],
            actor_id=actor_id,
            is_privileged=is_privileged
        )
        return _respond(epic_id)

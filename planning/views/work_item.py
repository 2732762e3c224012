# ============================================
# planning/views/work_item.py
# ============================================
from django.conf import settings
from rest_framework.views import APIView
from rest_framework.response import Response
from rest_framework import serializers, status
from drf_spectacular.utils import extend_schema, extend_schema_view, inline_serializer

from planning.exceptions import EntityNotFound
from planning.serializers.work_item import (
    WorkItemAssignSerializer,
    WorkItemCreateSerializer,
    WorkItemListOutputSerializer,
    WorkItemOutputSerializer,
    WorkItemSearchSerializer,
    WorkItemStatusSerializer,
    WorkItemUpdateSerializer,
)
from planning.selectors.work_item import WorkItemSelector
from planning.services.work_item import WorkItemService
from planning.views.utils import actor_of, path_int, path_str, q_int, q_str, std_errors

TAGS = ["Work items"]
ID_PARAM = path_int("work_item_id", "Work item ID")

SearchResultSerializer = inline_serializer(
    name="WorkItemSearchResult",
    fields={
        "count": serializers.IntegerField(),
        "page": serializers.IntegerField(),
        "page_size": serializers.IntegerField(),
        "results": WorkItemListOutputSerializer(many=True),
    }
)


def _respond(work_item_id, code=status.HTTP_200_OK):
    """Re-read with related data and child count, enrich users, serialize"""
    work_item = WorkItemSelector.get_work_item_by_id(work_item_id)
    WorkItemSelector.enrich_work_items_with_users([work_item])
    return Response(WorkItemOutputSerializer(work_item).data, status=code)


class WorkItemCreateAPIView(APIView):

    @extend_schema(
        tags=TAGS, summary="Create work item",
        description="Starts in the default status; the key is generated from the project key.",
        request=WorkItemCreateSerializer,
        responses={201: WorkItemOutputSerializer, **std_errors()},
    )
    def post(self, request):
        serializer = WorkItemCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        actor_id, _ = actor_of(request)
        work_item = WorkItemService.create_work_item(actor_id=actor_id, **serializer.validated_data)
        return _respond(work_item.id, status.HTTP_201_CREATED)


@extend_schema_view(
    get=extend_schema(
        tags=TAGS, summary="Get work item",
        parameters=[ID_PARAM],
        responses={200: WorkItemOutputSerializer, **std_errors()},
    ),
    put=extend_schema(
        tags=TAGS, summary="Update work item",
        description="Parent changes run the hierarchy checks; status changes run the transition checks.",
        parameters=[ID_PARAM],
        request=WorkItemUpdateSerializer,
        responses={200: WorkItemOutputSerializer, **std_errors()},
    ),
    delete=extend_schema(
        tags=TAGS, summary="Delete work item without children",
        parameters=[ID_PARAM],
        responses={204: None, **std_errors()},
    ),
)
class WorkItemDetailAPIView(APIView):

    def get(self, request, work_item_id):
        if not WorkItemSelector.get_work_item_by_id(work_item_id):
            raise EntityNotFound('Work item', work_item_id)
        return _respond(work_item_id)

    def put(self, request, work_item_id):
        serializer = WorkItemUpdateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        actor_id, is_privileged = actor_of(request)
        WorkItemService.update_work_item(
            work_item_id=work_item_id,
            actor_id=actor_id,
            is_privileged=is_privileged,
            **serializer.validated_data
        )
        return _respond(work_item_id)

    def delete(self, request, work_item_id):
        actor_id, is_privileged = actor_of(request)
        WorkItemService.delete_work_item(
            work_item_id=work_item_id,
            actor_id=actor_id,
            is_privileged=is_privileged
        )
        return Response(status=status.HTTP_204_NO_CONTENT)


@extend_schema(
    tags=TAGS, summary="Get work item by key",
    parameters=[path_str("key", "Work item key, e.g. ENG-12")],
    responses={200: WorkItemOutputSerializer, **std_errors()},
)
class WorkItemByKeyAPIView(APIView):

    def get(self, request, key):
        work_item = WorkItemSelector.get_work_item_by_key(key)
        if not work_item:
            raise EntityNotFound(f"Work item with key '{key}'")
        WorkItemSelector.enrich_work_items_with_users([work_item])
        return Response(WorkItemOutputSerializer(work_item).data)


@extend_schema_view(
    get=extend_schema(
        tags=TAGS, summary="Search work items",
        parameters=[
            q_int("project_id", "Filter by project"),
            q_int("epic_id", "Filter by epic"),
            q_str("item_type", "TASK / BUG / SUBTASK"),
            q_int("status_id", "Filter by status"),
            q_str("assignee_id", "Filter by assignee"),
            q_str("reporter_id", "Filter by reporter"),
            q_int("priority", "1 (highest) .. 5 (lowest)"),
            q_str("search_text", "Case-insensitive match on key, summary and description"),
            q_int("page", "Page number (1-based)"),
            q_int("page_size", "Items per page"),
        ],
        responses={200: SearchResultSerializer, **std_errors()},
    ),
    post=extend_schema(
        tags=TAGS, summary="Search work items (filters in body)",
        request=WorkItemSearchSerializer,
        responses={200: SearchResultSerializer, **std_errors()},
    ),
)
class WorkItemSearchAPIView(APIView):
    """Most recently updated first; ``count`` is the total across all pages"""

    def get(self, request):
        return self._search(request.query_params)

    def post(self, request):
        return self._search(request.data)

    def _search(self, payload):
        serializer = WorkItemSearchSerializer(data=payload)
        serializer.is_valid(raise_exception=True)
        filters = dict(serializer.validated_data)

        page = filters.pop('page')
        max_page_size = getattr(settings, 'PLANNING_MAX_PAGE_SIZE', 200)
        page_size = min(
            filters.pop('page_size', None) or getattr(settings, 'PLANNING_PAGE_SIZE', 50),
            max_page_size
        )

        queryset = WorkItemSelector.search(**filters)
        items, total = WorkItemSelector.paginate(queryset, page=page, page_size=page_size)
        items = WorkItemSelector.enrich_work_items_with_users(items)

        return Response({
            'count': total,
            'page': page,
            'page_size': page_size,
            'results': WorkItemListOutputSerializer(items, many=True).data,
        })


@extend_schema(
    tags=TAGS, summary="Change work item status",
    parameters=[ID_PARAM],
    request=WorkItemStatusSerializer,
    responses={200: WorkItemOutputSerializer, **std_errors()},
)
class WorkItemStatusAPIView(APIView):

    def put(self, request, work_item_id):
        serializer = WorkItemStatusSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        actor_id, is_privileged = actor_of(request)
        WorkItemService.update_work_item(
            work_item_id=work_item_id,
            actor_id=actor_id,
            is_privileged=is_privileged,
            status_id=serializer.validated_data['status_id']
        )
        return _respond(work_item_id)


@extend_schema(
    tags=TAGS, summary="Assign or unassign work item",
    parameters=[ID_PARAM],
    request=WorkItemAssignSerializer,
    responses={200: WorkItemOutputSerializer, **std_errors()},
)
class WorkItemAssignAPIView(APIView):

    def put(self, request, work_item_id):
        serializer = WorkItemAssignSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        actor_id, is_privileged = actor_of(request)
        WorkItemService.assign_work_item(
            work_item_id=work_item_id,
            assignee_id=serializer.validated_data['assignee_id'],
            actor_id=actor_id,
            is_privileged=is_privileged
        )
        return _respond(work_item_id)

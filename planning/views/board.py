# ============================================
# planning/views/board.py
# ============================================
from rest_framework.views import APIView
from rest_framework.response import Response
from rest_framework import status
from drf_spectacular.utils import extend_schema, extend_schema_view

from planning.serializers.board import (
    BoardColumnOutputSerializer,
    BoardColumnUpdateSerializer,
    BoardCreateSerializer,
    BoardMoveSerializer,
    BoardOutputSerializer,
    BoardUpdateSerializer,
    BoardViewSerializer,
    ColumnReorderSerializer,
)
from planning.serializers.work_item import WorkItemOutputSerializer
from planning.selectors.work_item import WorkItemSelector
from planning.services.board import BoardService
from planning.views.utils import actor_of, int_list_param, path_int, q_int, q_str, std_errors

TAGS = ["Boards"]
PROJECT_PARAM = path_int("project_id", "Project ID")


@extend_schema_view(
    get=extend_schema(
        tags=TAGS, summary="Get board configuration",
        parameters=[PROJECT_PARAM],
        responses={200: BoardOutputSerializer, **std_errors()},
    ),
    post=extend_schema(
        tags=TAGS, summary="Create board (one column per active status)",
        parameters=[PROJECT_PARAM],
        request=BoardCreateSerializer,
        responses={201: BoardOutputSerializer, **std_errors()},
    ),
    put=extend_schema(
        tags=TAGS, summary="Update board name/description",
        parameters=[PROJECT_PARAM],
        request=BoardUpdateSerializer,
        responses={200: BoardOutputSerializer, **std_errors()},
    ),
    delete=extend_schema(
        tags=TAGS, summary="Delete board",
        parameters=[PROJECT_PARAM],
        responses={204: None, **std_errors()},
    ),
)
class BoardAPIView(APIView):

    def get(self, request, project_id):
        board = BoardService.get_board(project_id)
        return Response(BoardOutputSerializer(board).data)

    def post(self, request, project_id):
        serializer = BoardCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        actor_id, is_privileged = actor_of(request)
        board = BoardService.create_board(
            project_id=project_id,
            actor_id=actor_id,
            is_privileged=is_privileged,
            **serializer.validated_data
        )
        return Response(BoardOutputSerializer(board).data, status=status.HTTP_201_CREATED)

    def put(self, request, project_id):
        serializer = BoardUpdateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        actor_id, is_privileged = actor_of(request)
        board = BoardService.update_board(
            project_id=project_id,
            actor_id=actor_id,
            is_privileged=is_privileged,
            **serializer.validated_data
        )
        return Response(BoardOutputSerializer(board).data)

    def delete(self, request, project_id):
        actor_id, is_privileged = actor_of(request)
        BoardService.delete_board(project_id=project_id, actor_id=actor_id, is_privileged=is_privileged)
        return Response(status=status.HTTP_204_NO_CONTENT)


@extend_schema(
    tags=TAGS, summary="Board view",
    description="Columns in board order with their cards. Filters narrow the cards; every column is returned.",
    parameters=[
        PROJECT_PARAM,
        q_int("epic_id", "Only cards in these epics (repeatable)", many=True),
        q_str("assignee_id", "Only cards assigned to these users (repeatable)", many=True),
        q_str("search_text", "Case-insensitive match on key and summary"),
    ],
    responses={200: BoardViewSerializer, **std_errors()},
)
class BoardViewAPIView(APIView):

    def get(self, request, project_id):
        view = BoardService.get_board_view(
            project_id,
            epic_ids=int_list_param(request, 'epic_id'),
            assignee_ids=request.query_params.getlist('assignee_id'),
            search_text=request.query_params.get('search_text'),
        )
        return Response(BoardViewSerializer(view).data)


@extend_schema(
    tags=TAGS, summary="Move card to another column",
    description="Changes the status only. Parent, epic and ordering are untouched.",
    parameters=[PROJECT_PARAM, path_int("work_item_id", "Work item ID")],
    request=BoardMoveSerializer,
    responses={200: WorkItemOutputSerializer, **std_errors()},
)
class BoardMoveWorkItemAPIView(APIView):

    def put(self, request, project_id, work_item_id):
        serializer = BoardMoveSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        actor_id, _ = actor_of(request)
        BoardService.move_work_item(
            project_id=project_id,
            work_item_id=work_item_id,
            to_status_id=serializer.validated_data['to_status_id'],
            actor_id=actor_id
        )

        work_item = WorkItemSelector.get_work_item_by_id(work_item_id)
        WorkItemSelector.enrich_work_items_with_users([work_item])
        return Response(WorkItemOutputSerializer(work_item).data)


@extend_schema(
    tags=TAGS, summary="Update column WIP limit / collapsed flag",
    parameters=[PROJECT_PARAM, path_int("column_id", "Board column ID")],
    request=BoardColumnUpdateSerializer,
    responses={200: BoardColumnOutputSerializer, **std_errors()},
)
class BoardColumnAPIView(APIView):

    def put(self, request, project_id, column_id):
        serializer = BoardColumnUpdateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        actor_id, is_privileged = actor_of(request)
        column = BoardService.update_column(
            project_id=project_id,
            column_id=column_id,
            actor_id=actor_id,
            is_privileged=is_privileged,
            **serializer.validated_data
        )
        return Response(BoardColumnOutputSerializer(column).data)


@extend_schema(
    tags=TAGS, summary="Reorder columns",
    description="column_ids must list every column of the board exactly once.",
    parameters=[PROJECT_PARAM],
    request=ColumnReorderSerializer,
    responses={200: BoardOutputSerializer, **std_errors()},
)
class BoardColumnReorderAPIView(APIView):

    def put(self, request, project_id):
        serializer = ColumnReorderSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        actor_id, is_privileged = actor_of(request)
        board = BoardService.reorder_columns(
            project_id=project_id,
            column_ids=serializer.validated_data['column_ids'],
            actor_id=actor_id,
            is_privileged=is_privileged
        )
        return Response(BoardOutputSerializer(board).data)

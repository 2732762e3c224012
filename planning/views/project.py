# ============================================
# planning/views/project.py
# ============================================
from rest_framework.views import APIView
from rest_framework.response import Response
from rest_framework import status
from drf_spectacular.utils import extend_schema, extend_schema_view

from planning.exceptions import EntityNotFound
from planning.serializers.project import (
    ProjectCreateSerializer,
    ProjectUpdateSerializer,
    ProjectOutputSerializer
)
from planning.selectors.project import ProjectSelector
from planning.services.project import ProjectService
from planning.views.utils import DefaultPagination, actor_of, path_int, q_str, std_errors

TAGS = ["Projects"]


def _parse_bool(value):
    if value is None:
        return None
    return value.lower() in ('1', 'true', 'yes')


@extend_schema_view(
    get=extend_schema(
        tags=TAGS, summary="List projects",
        parameters=[
            q_str("owner_id", "Only projects owned by this user"),
            q_str("is_active", "true/false"),
            q_str("is_archived", "true/false"),
        ],
        responses={200: ProjectOutputSerializer(many=True), **std_errors()},
    ),
    post=extend_schema(
        tags=TAGS, summary="Create project (caller becomes owner)",
        request=ProjectCreateSerializer,
        responses={201: ProjectOutputSerializer, **std_errors()},
    ),
)
class ProjectListCreateAPIView(APIView):
    """
    GET: List projects with epic and work item counts
    POST: Create a new project
    """

    def get(self, request):
        projects = ProjectSelector.get_projects_list(
            owner_id=request.query_params.get('owner_id'),
            is_active=_parse_bool(request.query_params.get('is_active')),
            is_archived=_parse_bool(request.query_params.get('is_archived')),
        )

        paginator = DefaultPagination()
        page = paginator.paginate_queryset(projects, request)

        serializer = ProjectOutputSerializer(page, many=True)
        return paginator.get_paginated_response(serializer.data)

    def post(self, request):
        serializer = ProjectCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        actor_id, _ = actor_of(request)
        project = ProjectService.create_project(owner_id=actor_id, **serializer.validated_data)

        return Response(ProjectOutputSerializer(project).data, status=status.HTTP_201_CREATED)


@extend_schema_view(
    get=extend_schema(
        tags=TAGS, summary="Get project",
        parameters=[path_int("project_id", "Project ID")],
        responses={200: ProjectOutputSerializer, **std_errors()},
    ),
    put=extend_schema(
        tags=TAGS, summary="Update project (owner or staff)",
        parameters=[path_int("project_id", "Project ID")],
        request=ProjectUpdateSerializer,
        responses={200: ProjectOutputSerializer, **std_errors()},
    ),
    delete=extend_schema(
        tags=TAGS, summary="Delete empty project (owner or staff)",
        parameters=[path_int("project_id", "Project ID")],
        responses={204: None, **std_errors()},
    ),
)
class ProjectDetailAPIView(APIView):

    def get(self, request, project_id):
        project = ProjectSelector.get_project_by_id(project_id)
        if not project:
            raise EntityNotFound('Project', project_id)
        return Response(ProjectOutputSerializer(project).data)

    def put(self, request, project_id):
        serializer = ProjectUpdateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        actor_id, is_privileged = actor_of(request)
        project = ProjectService.update_project(
            project_id=project_id,
            actor_id=actor_id,
            is_privileged=is_privileged,
            **serializer.validated_data
        )
        return Response(ProjectOutputSerializer(project).data)

    def delete(self, request, project_id):
        actor_id, is_privileged = actor_of(request)
        ProjectService.delete_project(project_id=project_id, actor_id=actor_id, is_privileged=is_privileged)
        return Response(status=status.HTTP_204_NO_CONTENT)


@extend_schema(
    tags=TAGS, summary="Archive project",
    parameters=[path_int("project_id", "Project ID")],
    request=None,
    responses={200: ProjectOutputSerializer, **std_errors()},
)
class ProjectArchiveAPIView(APIView):

    def post(self, request, project_id):
        actor_id, is_privileged = actor_of(request)
        project = ProjectService.archive_project(
            project_id=project_id, actor_id=actor_id, is_privileged=is_privileged
        )
        return Response(ProjectOutputSerializer(project).data)


@extend_schema(
    tags=TAGS, summary="Unarchive project",
    parameters=[path_int("project_id", "Project ID")],
    request=None,
    responses={200: ProjectOutputSerializer, **std_errors()},
)
class ProjectUnarchiveAPIView(APIView):

    def post(self, request, project_id):
        actor_id, is_privileged = actor_of(request)
        project = ProjectService.unarchive_project(
            project_id=project_id, actor_id=actor_id, is_privileged=is_privileged
        )
        return Response(ProjectOutputSerializer(project).data)

# ============================================
# planning/urls.py
# ============================================
from django.urls import path
from planning.views.status import (
    AllowedTransitionsAPIView,
    SeedStatusesAPIView,
    StatusDetailAPIView,
    StatusListCreateAPIView,
    TransitionListCreateAPIView,
    TransitionValidateAPIView,
)
from planning.views.project import (
    ProjectArchiveAPIView,
    ProjectDetailAPIView,
    ProjectListCreateAPIView,
    ProjectUnarchiveAPIView,
)
from planning.views.epic import (
    EpicDetailAPIView,
    EpicListCreateAPIView,
    EpicStatusAPIView,
)
from planning.views.work_item import (
    WorkItemAssignAPIView,
    WorkItemByKeyAPIView,
    WorkItemCreateAPIView,
    WorkItemDetailAPIView,
    WorkItemSearchAPIView,
    WorkItemStatusAPIView,
)
from planning.views.board import (
    BoardAPIView,
    BoardColumnAPIView,
    BoardColumnReorderAPIView,
    BoardMoveWorkItemAPIView,
    BoardViewAPIView,
)

app_name = 'planning'

urlpatterns = [
    # Statuses
    path('statuses/', StatusListCreateAPIView.as_view(), name='status-list-create'),
    path('statuses/transitions/', TransitionListCreateAPIView.as_view(), name='transition-list-create'),
    path('statuses/validate-transition/', TransitionValidateAPIView.as_view(), name='transition-validate'),
    path('statuses/seed/', SeedStatusesAPIView.as_view(), name='status-seed'),
    path('statuses/<int:status_id>/', StatusDetailAPIView.as_view(), name='status-detail'),
    path('statuses/<int:status_id>/transitions/', AllowedTransitionsAPIView.as_view(), name='status-allowed-transitions'),

    # Projects
    path('projects/', ProjectListCreateAPIView.as_view(), name='project-list-create'),
    path('projects/<int:project_id>/', ProjectDetailAPIView.as_view(), name='project-detail'),
    path('projects/<int:project_id>/archive/', ProjectArchiveAPIView.as_view(), name='project-archive'),
    path('projects/<int:project_id>/unarchive/', ProjectUnarchiveAPIView.as_view(), name='project-unarchive'),

    # Boards
    path('projects/<int:project_id>/board/', BoardAPIView.as_view(), name='board'),
    path('projects/<int:project_id>/board/view/', BoardViewAPIView.as_view(), name='board-view'),
    path(
        'projects/<int:project_id>/board/workitems/<int:work_item_id>/move/',
        BoardMoveWorkItemAPIView.as_view(),
        name='board-move-work-item'
    ),
    path(
        'projects/<int:project_id>/board/columns/reorder/',
        BoardColumnReorderAPIView.as_view(),
        name='board-column-reorder'
    ),
    path(
        'projects/<int:project_id>/board/columns/<int:column_id>/',
        BoardColumnAPIView.as_view(),
        name='board-column'
    ),

    # Epics
    path('epics/', EpicListCreateAPIView.as_view(), name='epic-list-create'),
    path('epics/<int:epic_id>/', EpicDetailAPIView.as_view(), name='epic-detail'),
    path('epics/<int:epic_id>/status/', EpicStatusAPIView.as_view(), name='epic-status'),

    # Work items
    path('workitems/', WorkItemCreateAPIView.as_view(), name='work-item-create'),
    path('workitems/search/', WorkItemSearchAPIView.as_view(), name='work-item-search'),
    path('workitems/key/<str:key>/', WorkItemByKeyAPIView.as_view(), name='work-item-by-key'),
    path('workitems/<int:work_item_id>/', WorkItemDetailAPIView.as_view(), name='work-item-detail'),
    path('workitems/<int:work_item_id>/status/', WorkItemStatusAPIView.as_view(), name='work-item-status'),
    path('workitems/<int:work_item_id>/assign/', WorkItemAssignAPIView.as_view(), name='work-item-assign'),
]

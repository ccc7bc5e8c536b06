"""
API Views for Task Sync.

Thin adapters: each view validates the request shape with a serializer,
calls the task service or the dashboard aggregator, and serializes the
result. Domain errors raised by the service are turned into responses by
``tasks.handlers.api_exception_handler``.
"""

from drf_spectacular.types import OpenApiTypes
from drf_spectacular.utils import extend_schema, OpenApiParameter
from rest_framework import status
from rest_framework.decorators import api_view
from rest_framework.request import Request
from rest_framework.response import Response

from . import services
from .dashboard import build_dashboard
from .models import Task
from .read_models import task_read_model, task_read_models
from .serializers import (
    TaskChecklistSerializer,
    TaskCreateSerializer,
    TaskDetailSerializer,
    TaskSerializer,
    TaskStatusSerializer,
    TaskUpdateSerializer,
)


# ============================================
# TASKS
# ============================================

@extend_schema(
    methods=['GET'],
    summary="List tasks",
    description="""
    Tasks visible to the requester (all tasks for admins, assigned tasks
    otherwise) with a status summary.
    """,
    parameters=[
        OpenApiParameter(
            'status', OpenApiTypes.STR, OpenApiParameter.QUERY,
            enum=list(Task.Status.values),
            description='Exact status filter'
        ),
    ],
    responses={200: OpenApiTypes.OBJECT},
    tags=['Tasks']
)
@extend_schema(
    methods=['POST'],
    summary="Create a task",
    request=TaskCreateSerializer,
    responses={201: OpenApiTypes.OBJECT},
    tags=['Tasks']
)
@api_view(['GET', 'POST'])
def task_collection(request: Request) -> Response:
    """
    GET  /api/tasks/?status=Pending
    POST /api/tasks/
    """
    if request.method == 'POST':
        return _create_task(request)

    listing = services.list_tasks(
        request.user,
        status=request.query_params.get('status') or None
    )
    return Response({
        'tasks': task_read_models(listing.tasks),
        'statusSummary': listing.status_summary.to_dict(),
    })


def _create_task(request: Request) -> Response:
    serializer = TaskCreateSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)

    task = services.create_task(
        created_by=request.user,
        assigned_to=request.data.get('assignedTo'),
        **serializer.validated_data
    )
    return Response(
        {'message': 'Task created successfully', 'task': TaskSerializer(task).data},
        status=status.HTTP_201_CREATED
    )


@extend_schema(
    methods=['GET'],
    summary="Get a task",
    responses={200: TaskDetailSerializer},
    tags=['Tasks']
)
@extend_schema(
    methods=['PUT'],
    summary="Update a task (admin)",
    request=TaskUpdateSerializer,
    responses={200: OpenApiTypes.OBJECT},
    tags=['Tasks']
)
@extend_schema(
    methods=['DELETE'],
    summary="Delete a task (admin)",
    responses={200: OpenApiTypes.OBJECT},
    tags=['Tasks']
)
@api_view(['GET', 'PUT', 'DELETE'])
def task_detail(request: Request, task_id: int) -> Response:
    """
    GET    /api/tasks/<id>/
    PUT    /api/tasks/<id>/
    DELETE /api/tasks/<id>/
    """
    if request.method == 'GET':
        return Response(task_read_model(services.get_task(task_id)))

    if request.method == 'DELETE':
        services.delete_task(task_id, request.user)
        return Response({'message': 'Task deleted successfully'})

    serializer = TaskUpdateSerializer(data=request.data, partial=True)
    serializer.is_valid(raise_exception=True)

    changes = dict(serializer.validated_data)
    if 'assignedTo' in request.data:
        changes['assigned_to'] = request.data['assignedTo']

    task = services.update_task(task_id, changes, request.user)
    return Response({'message': 'Task updated successfully', 'task': TaskSerializer(task).data})


@extend_schema(
    summary="Update task status",
    description="""
    Admins and assignees may set the status. Completed marks every
    checklist item done and sets progress to 100.
    """,
    request=TaskStatusSerializer,
    responses={200: OpenApiTypes.OBJECT},
    tags=['Tasks']
)
@api_view(['PUT'])
def update_task_status(request: Request, task_id: int) -> Response:
    """
    PUT /api/tasks/<id>/status/
    """
    serializer = TaskStatusSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)

    task = services.update_task_status(
        task_id,
        serializer.validated_data.get('status'),
        request.user
    )
    return Response({'message': 'Status updated', 'task': TaskSerializer(task).data})


@extend_schema(
    summary="Replace task checklist",
    description="""
    Admins and assignees may replace the checklist. Progress and status
    are recomputed; the response expands assignees.
    """,
    request=TaskChecklistSerializer,
    responses={200: OpenApiTypes.OBJECT},
    tags=['Tasks']
)
@api_view(['PUT'])
def update_task_checklist(request: Request, task_id: int) -> Response:
    """
    PUT /api/tasks/<id>/checklist/
    """
    serializer = TaskChecklistSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)

    task = services.update_task_checklist(
        task_id,
        serializer.validated_data['todo_checklist'],
        request.user
    )
    return Response({'message': 'Checklist updated', 'task': task_read_model(task)})


# ============================================
# DASHBOARDS
# ============================================

@extend_schema(
    summary="Global dashboard",
    description="Statistics, status/priority charts and recent tasks across all tasks.",
    responses={200: OpenApiTypes.OBJECT},
    tags=['Dashboard']
)
@api_view(['GET'])
def dashboard(request: Request) -> Response:
    """
    GET /api/dashboard/
    """
    return Response(build_dashboard())


@extend_schema(
    summary="Personal dashboard",
    description="Same as the global dashboard, limited to tasks assigned to the requester.",
    responses={200: OpenApiTypes.OBJECT},
    tags=['Dashboard']
)
@api_view(['GET'])
def user_dashboard(request: Request) -> Response:
    """
    GET /api/dashboard/user/
    """
    return Response(build_dashboard(user=request.user))

import logging

from django.db.models import Count
from django.utils import timezone
from django_filters.rest_framework import DjangoFilterBackend
from drf_spectacular.utils import OpenApiParameter, extend_schema
from rest_framework import filters, serializers, status, viewsets
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated

from project.models import Project
from project.permission import IsProjectOwner
from task import dependency_registry
from task.filters import TaskFilter
from task.gantt import to_gantt_records
from task.models import Status, Task
from task.adapters.serializers.task_serializer import (
    BatchStatusSerializer,
    DependencySerializer,
    DependentSerializer,
    DependencyWriteSerializer,
    TaskCreateSerializer,
    TaskDetailSerializer,
    TaskProgressSerializer,
    TaskSerializer,
    TaskUpdateSerializer,
)
from utils.custom_paginator import CustomPaginator
from utils.filters import SortByOrderingFilter, parse_id
from utils.response import success_response

logger = logging.getLogger(__name__)


class TaskPaginator(CustomPaginator):
    page_size = 20
    results_key = 'tasks'
    message = 'Tasks fetched successfully'


class TaskViewSet(viewsets.ModelViewSet):
    """
    Tasks API, scoped to the projects the caller owns.

    Supports:
    - list filtering by project/status/priority/assignee, text search, sortBy/sortOrder
    - patch-style updates (absent field = unchanged, null = cleared)
    - batch status updates and progress-only updates
    - dependency edges between tasks
    - chart-ready records for the Gantt view
    """
    serializer_class = TaskSerializer
    pagination_class = TaskPaginator
    permission_classes = [IsAuthenticated, IsProjectOwner]
    lookup_value_regex = '[0-9]+'
    not_found_message = 'Task not found'

    filter_backends = [DjangoFilterBackend, filters.SearchFilter, SortByOrderingFilter]
    filterset_class = TaskFilter
    search_fields = ['title', 'description']
    ordering_fields = [
        'id',
        'title',
        'description',
        'status',
        'priority',
        'start_date',
        'end_date',
        'progress',
        'project_id',
        'assignee_id',
        'parent_task_id',
        'created_at',
        'updated_at',
    ]
    ordering = ['-created_at', '-id']

    def get_queryset(self):
        if getattr(self, 'swagger_fake_view', False):
            return Task.objects.none()

        qs = (
            Task.objects.filter(project__owner=self.request.user)
            .select_related('project', 'assignee')
            .prefetch_related('dependencies__depends_on_task', 'dependents__task')
            .annotate(file_count=Count('files', distinct=True))
        )
        if self.action == 'retrieve':
            qs = qs.prefetch_related('subtasks', 'files__uploaded_by')
        return qs

    def get_serializer_class(self):
        if self.action == 'create':
            return TaskCreateSerializer
        if self.action in ('update', 'partial_update'):
            return TaskUpdateSerializer
        if self.action == 'retrieve':
            return TaskDetailSerializer
        if self.action == 'progress':
            return TaskProgressSerializer
        if self.action == 'batch_update':
            return BatchStatusSerializer
        if self.action == 'dependencies':
            return DependencyWriteSerializer
        return TaskSerializer

    def _require_owned_project(self, project_id):
        if not project_id:
            return None
        project_id = parse_id(project_id, 'projectId', 'Project ID must be a positive integer')
        if not Project.objects.filter(pk=project_id, owner=self.request.user).exists():
            raise serializers.ValidationError({'projectId': 'Project not found or access denied'})
        return project_id

    def _read(self, instance):
        """Re-load through the scoped queryset so annotations and prefetches apply."""
        return self.get_queryset().get(pk=instance.pk)

    def list(self, request, *args, **kwargs):
        self._require_owned_project(request.query_params.get('projectId'))
        return super().list(request, *args, **kwargs)

    def retrieve(self, request, *args, **kwargs):
        instance = self.get_object()
        return success_response('Task fetched successfully', {'task': TaskDetailSerializer(instance).data})

    def create(self, request, *args, **kwargs):
        # Use write serializer for validation and saving
        write_serializer = self.get_serializer(data=request.data)
        write_serializer.is_valid(raise_exception=True)
        instance = write_serializer.save()
        logger.info(f"Task {instance.id} created in project {instance.project_id} by user {request.user.id}")

        # Use read serializer for response to include all fields
        read_serializer = TaskSerializer(self._read(instance))
        return success_response('Task created successfully', {'task': read_serializer.data}, status.HTTP_201_CREATED)

    def update(self, request, *args, **kwargs):
        # PUT behaves as a patch: absent fields keep their stored value
        kwargs.pop('partial', None)
        instance = self.get_object()

        write_serializer = self.get_serializer(instance, data=request.data, partial=True)
        write_serializer.is_valid(raise_exception=True)
        instance = write_serializer.save()

        read_serializer = TaskSerializer(self._read(instance))
        return success_response('Task updated successfully', {'task': read_serializer.data})

    def destroy(self, request, *args, **kwargs):
        instance = self.get_object()
        task_id = instance.id
        # dependencies and files go with it (CASCADE); subtasks are detached
        instance.delete()
        logger.info(f"Task {task_id} deleted by user {request.user.id}")
        return success_response('Task deleted successfully')

    @extend_schema(request=TaskProgressSerializer, responses={200: TaskSerializer})
    @action(detail=True, methods=['patch'])
    def progress(self, request, pk=None):
        instance = self.get_object()
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        # status is left alone even at 100
        instance.progress = serializer.validated_data['progress']
        instance.save(update_fields=['progress', 'updated_at'])
        return success_response('Task progress updated successfully', {'task': TaskSerializer(self._read(instance)).data})

    @extend_schema(request=BatchStatusSerializer, responses={200: None})
    @action(detail=False, methods=['patch'], url_path='batch-update')
    def batch_update(self, request):
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        changes = {'status': data['status'], 'updated_at': timezone.now()}
        if data['status'] == Status.COMPLETED:
            changes['progress'] = 100
        elif 'progress' in data:
            changes['progress'] = data['progress']

        updated_count = Task.objects.filter(
            id__in=data['taskIds'],
            project__owner=request.user,
        ).update(**changes)

        logger.info(f"Batch status update to {data['status']} touched {updated_count} tasks for user {request.user.id}")
        return success_response('Task statuses updated successfully', {'updatedCount': updated_count})

    @extend_schema(request=DependencyWriteSerializer, responses={201: DependencySerializer})
    @action(detail=False, methods=['post', 'delete'], url_path='dependencies')
    def dependencies(self, request):
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        task_id = serializer.validated_data['taskId']
        depends_on_task_id = serializer.validated_data['dependsOnTaskId']

        if request.method == 'DELETE':
            dependency_registry.remove_dependency(request.user, task_id, depends_on_task_id)
            return success_response('Task dependency removed successfully')

        edge = dependency_registry.add_dependency(request.user, task_id, depends_on_task_id)
        return success_response(
            'Task dependency added successfully',
            {'dependency': DependencySerializer(edge).data},
            status.HTTP_201_CREATED,
        )

    @action(detail=True, methods=['get'], url_path='dependencies', url_name='dependency-edges')
    def dependency_edges(self, request, pk=None):
        instance = self.get_object()
        edges = dependency_registry.edges_for(instance)
        return success_response('Task dependencies fetched successfully', {
            'dependencies': DependencySerializer(edges['dependencies'], many=True).data,
            'dependents': DependentSerializer(edges['dependents'], many=True).data,
        })

    @extend_schema(parameters=[OpenApiParameter('projectId', int, required=False)])
    @action(detail=False, methods=['get'])
    def gantt(self, request):
        project_id = self._require_owned_project(request.query_params.get('projectId'))

        qs = Task.objects.filter(project__owner=request.user).select_related('project').prefetch_related('dependencies')
        if project_id is not None:
            qs = qs.filter(project_id=project_id)
        qs = qs.order_by('start_date', 'id')

        return success_response('Gantt data fetched successfully', {'tasks': to_gantt_records(qs)})

import logging

from django.db.models import Count, Prefetch
from django_filters.rest_framework import DjangoFilterBackend
from drf_spectacular.utils import extend_schema
from rest_framework import filters, status, viewsets
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated

from project.adapters.serializers.project_serializer import (
    ProjectDetailSerializer,
    ProjectSerializer,
    ProjectWriteSerializer,
)
from project.filters import ProjectFilter
from project.models import Project
from project.permission import IsProjectOwner
from project.stats import annotate_task_stats, project_stats
from task.models import Task
from utils.custom_paginator import CustomPaginator
from utils.response import success_response

logger = logging.getLogger(__name__)


class ProjectPaginator(CustomPaginator):
    page_size = 10
    results_key = 'projects'
    message = 'Projects fetched successfully'


class ProjectViewSet(viewsets.ModelViewSet):
    """
    Projects API with:
    - bearer JWT auth
    - list filtering by status and search over name/description
    - owner scoping in get_queryset()
    - object-level permissions via IsProjectOwner
    - read/write serializer switching
    """
    serializer_class = ProjectSerializer
    pagination_class = ProjectPaginator
    permission_classes = [IsAuthenticated, IsProjectOwner]
    filter_backends = [DjangoFilterBackend, filters.SearchFilter]
    filterset_class = ProjectFilter
    search_fields = ['name', 'description']
    lookup_value_regex = '[0-9]+'
    not_found_message = 'Project not found'

    def get_queryset(self):
        if getattr(self, 'swagger_fake_view', False):
            return Project.objects.none()

        qs = annotate_task_stats(Project.objects.filter(owner=self.request.user))

        if self.action == 'retrieve':
            tasks = (
                Task.objects.select_related('project', 'assignee')
                .prefetch_related('dependencies__depends_on_task', 'dependents__task')
                .annotate(file_count=Count('files', distinct=True))
                .order_by('-created_at', '-id')
            )
            qs = qs.prefetch_related(Prefetch('tasks', queryset=tasks))

        return qs.order_by('-updated_at', '-id')

    def get_serializer_class(self):
        if self.action in ('create', 'update', 'partial_update'):
            return ProjectWriteSerializer
        if self.action == 'retrieve':
            return ProjectDetailSerializer
        return ProjectSerializer

    def _read(self, instance):
        return self.get_queryset().get(pk=instance.pk)

    def retrieve(self, request, *args, **kwargs):
        instance = self.get_object()
        return success_response('Project fetched successfully', {'project': ProjectDetailSerializer(instance).data})

    def create(self, request, *args, **kwargs):
        # Use write serializer for validation and saving
        write_serializer = self.get_serializer(data=request.data)
        write_serializer.is_valid(raise_exception=True)
        instance = write_serializer.save(owner=request.user)
        logger.info(f"Project {instance.id} created by user {request.user.id}")

        # Use read serializer for response to include task stats
        read_serializer = ProjectSerializer(self._read(instance))
        return success_response('Project created successfully', {'project': read_serializer.data}, status.HTTP_201_CREATED)

    def update(self, request, *args, **kwargs):
        # PUT behaves as a patch: absent fields keep their stored value
        kwargs.pop('partial', None)
        instance = self.get_object()

        write_serializer = self.get_serializer(instance, data=request.data, partial=True)
        write_serializer.is_valid(raise_exception=True)
        instance = write_serializer.save()

        read_serializer = ProjectSerializer(self._read(instance))
        return success_response('Project updated successfully', {'project': read_serializer.data})

    def destroy(self, request, *args, **kwargs):
        instance = self.get_object()
        project_id = instance.id
        # tasks, their dependencies and files are removed by CASCADE
        instance.delete()
        logger.info(f"Project {project_id} deleted by user {request.user.id}")
        return success_response('Project deleted successfully')

    @extend_schema(responses={200: None})
    @action(detail=True, methods=['get'])
    def stats(self, request, pk=None):
        instance = self.get_object()
        return success_response('Project stats fetched successfully', {'stats': project_stats(instance)})

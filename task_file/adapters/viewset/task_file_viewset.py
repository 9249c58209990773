import logging

from django.db import transaction
from django.http import FileResponse
from drf_spectacular.utils import extend_schema
from rest_framework import status, viewsets
from rest_framework.parsers import FormParser, MultiPartParser
from rest_framework.permissions import IsAuthenticated

from project.permission import IsProjectOwner
from task.models import Task
from task_file.adapters.serializers.task_file_serializer import (
    TaskFilePreviewSerializer,
    TaskFileSerializer,
    TaskFileUploadSerializer,
)
from task_file.models import TaskFile, stored_file_name
from utils.response import error_response, success_response

logger = logging.getLogger(__name__)

TASK_ACCESS_DENIED = 'Task not found or access denied'


class TaskFileViewSet(viewsets.GenericViewSet):
    """
    Task attachments:
    - multipart upload of up to TASK_FILE_MAX_COUNT files per request
    - listing per task
    - download as attachment, JSON preview info
    - delete (row and stored file)
    """
    serializer_class = TaskFileSerializer
    permission_classes = [IsAuthenticated, IsProjectOwner]
    parser_classes = [MultiPartParser, FormParser]
    not_found_message = 'File not found'

    def get_queryset(self):
        if getattr(self, 'swagger_fake_view', False):
            return TaskFile.objects.none()
        return TaskFile.objects.filter(task__project__owner=self.request.user).select_related('task__project', 'uploaded_by')

    @extend_schema(request={'multipart/form-data': TaskFileUploadSerializer}, responses={201: TaskFileSerializer(many=True)})
    def upload(self, request):
        serializer = TaskFileUploadSerializer(data=request.data, context={'request': request})
        serializer.is_valid(raise_exception=True)
        task = serializer.validated_data['taskId']
        uploads = serializer.validated_data['files']

        records = []
        stored_names = []
        try:
            with transaction.atomic():
                for upload in uploads:
                    record = TaskFile(
                        filename=stored_file_name(upload.name),
                        original_name=upload.name,
                        file_size=upload.size,
                        mime_type=upload.content_type,
                        task=task,
                        uploaded_by=request.user,
                    )
                    record.file.save(record.filename, upload, save=False)
                    stored_names.append(record.file.name)
                    # storage may still adjust the name on collision
                    record.filename = record.file.name.rsplit('/', 1)[-1]
                    record.save()
                    records.append(record)
        except Exception:
            logger.exception(f"Saving uploads for task {task.id} failed, removing {len(stored_names)} stored files")
            storage = TaskFile._meta.get_field('file').storage
            for name in stored_names:
                storage.delete(name)
            raise

        logger.info(f"User {request.user.id} uploaded {len(records)} files to task {task.id}")
        return success_response(
            'Files uploaded successfully',
            {'files': TaskFileSerializer(records, many=True).data},
            status.HTTP_201_CREATED,
        )

    @extend_schema(responses={200: TaskFileSerializer(many=True)})
    def by_task(self, request, task_id=None):
        if not Task.objects.filter(pk=task_id, project__owner=request.user).exists():
            return error_response(TASK_ACCESS_DENIED)

        files = self.get_queryset().filter(task_id=task_id).order_by('-created_at', '-id')
        return success_response('Files fetched successfully', {'files': TaskFileSerializer(files, many=True).data})

    def download(self, request, pk=None):
        record = self.get_object()
        if not record.file or not record.file.storage.exists(record.file.name):
            logger.warning(f"Stored file missing for task file {record.id}: {record.file.name}")
            return error_response('File has been removed from storage')

        return FileResponse(
            record.file.open('rb'),
            as_attachment=True,
            filename=record.original_name,
            content_type=record.mime_type,
        )

    @extend_schema(responses={200: TaskFilePreviewSerializer})
    def preview(self, request, pk=None):
        record = self.get_object()
        return success_response('File preview fetched successfully', {'file': TaskFilePreviewSerializer(record).data})

    def destroy(self, request, pk=None):
        record = self.get_object()
        file_id = record.id
        # post_delete removes the stored file
        record.delete()
        logger.info(f"Task file {file_id} deleted by user {request.user.id}")
        return success_response('File deleted successfully')

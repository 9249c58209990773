from django.conf import settings
from django.urls import reverse
from rest_framework import serializers

from task.models import Task
from task_file.models import TaskFile
from user.adapters.serializers.user_serializers import UserSummarySerializer

FILE_TYPE_DESCRIPTIONS = {
    'application/pdf': 'PDF document',
    'application/msword': 'Word document',
    'application/vnd.openxmlformats-officedocument.wordprocessingml.document': 'Word document',
    'application/vnd.ms-excel': 'Excel spreadsheet',
    'application/vnd.openxmlformats-officedocument.spreadsheetml.sheet': 'Excel spreadsheet',
    'text/plain': 'Text file',
    'application/zip': 'Compressed archive',
}
UNKNOWN_FILE_TYPE = 'Unknown type'


class TaskFileSerializer(serializers.ModelSerializer):
    originalName = serializers.CharField(source='original_name', read_only=True)
    fileSize = serializers.IntegerField(source='file_size', read_only=True)
    mimeType = serializers.CharField(source='mime_type', read_only=True)
    downloadUrl = serializers.SerializerMethodField()
    uploadedBy = UserSummarySerializer(source='uploaded_by', read_only=True)
    uploadedAt = serializers.DateTimeField(source='created_at', read_only=True)

    class Meta:
        model = TaskFile
        fields = (
            'id',
            'filename',
            'originalName',
            'fileSize',
            'mimeType',
            'downloadUrl',
            'uploadedBy',
            'uploadedAt',
        )

    def get_downloadUrl(self, obj):
        return reverse('task-file-download', args=[obj.id])


class TaskFilePreviewSerializer(serializers.ModelSerializer):
    originalName = serializers.CharField(source='original_name', read_only=True)
    fileSize = serializers.IntegerField(source='file_size', read_only=True)
    mimeType = serializers.CharField(source='mime_type', read_only=True)
    uploadedAt = serializers.DateTimeField(source='created_at', read_only=True)
    isImage = serializers.BooleanField(source='is_image', read_only=True)

    class Meta:
        model = TaskFile
        fields = ('id', 'filename', 'originalName', 'fileSize', 'mimeType', 'uploadedAt', 'isImage')

    def to_representation(self, instance):
        data = super().to_representation(instance)
        # images get a link back to this endpoint, everything else a readable type name
        if instance.is_image:
            data['previewUrl'] = reverse('task-file-preview', args=[instance.id])
        else:
            data['fileType'] = FILE_TYPE_DESCRIPTIONS.get(instance.mime_type, UNKNOWN_FILE_TYPE)
        return data


class UploadTaskField(serializers.PrimaryKeyRelatedField):
    default_error_messages = {
        'required': 'Task ID is required',
        'null': 'Task ID is required',
        'does_not_exist': 'Task not found or access denied',
        'incorrect_type': 'Task ID must be a positive integer',
    }

    def get_queryset(self):
        return Task.objects.filter(project__owner=self.context['request'].user)


class TaskFileUploadSerializer(serializers.Serializer):
    taskId = UploadTaskField()
    files = serializers.ListField(
        child=serializers.FileField(allow_empty_file=True),
        allow_empty=False,
        error_messages={
            'required': 'No files uploaded',
            'empty': 'No files uploaded',
        },
    )

    def validate_files(self, value):
        max_count = settings.TASK_FILE_MAX_COUNT
        max_size = settings.TASK_FILE_MAX_SIZE

        if len(value) > max_count:
            raise serializers.ValidationError(f'At most {max_count} files can be uploaded at once')
        for upload in value:
            if upload.size > max_size:
                raise serializers.ValidationError(
                    f'File size cannot exceed {max_size // (1024 * 1024)}MB: {upload.name}'
                )
            if upload.content_type not in settings.TASK_FILE_ALLOWED_TYPES:
                raise serializers.ValidationError(f'Unsupported file type: {upload.name}')
        return value

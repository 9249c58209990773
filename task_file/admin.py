from django.contrib import admin

from task_file.models import TaskFile

# Register your models here.

@admin.register(TaskFile)
class TaskFileAdmin(admin.ModelAdmin):
    list_display = ('original_name', 'task', 'mime_type', 'file_size', 'uploaded_by', 'created_at')
    search_fields = ('original_name', 'filename', 'task__title')
    list_filter = ('mime_type',)
    raw_id_fields = ('task', 'uploaded_by')
    readonly_fields = ('filename', 'file_size', 'mime_type', 'created_at', 'updated_at')

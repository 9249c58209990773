from django.contrib import admin
from django_summernote.admin import SummernoteModelAdmin

from task.models import Task, TaskDependency

# Register your models here.

class TaskDependencyInline(admin.TabularInline):
    model = TaskDependency
    fk_name = 'task'
    extra = 0
    raw_id_fields = ('depends_on_task',)

@admin.register(Task)
class TaskAdmin(SummernoteModelAdmin):
    list_display = ('title', 'project', 'status', 'priority', 'progress', 'assignee', 'created_at', 'updated_at')
    search_fields = ('title', 'description', 'project__name')
    list_filter = ('status', 'priority')
    raw_id_fields = ('project', 'assignee', 'parent_task')
    inlines = [TaskDependencyInline]
    summernote_fields = ('description',)

@admin.register(TaskDependency)
class TaskDependencyAdmin(admin.ModelAdmin):
    list_display = ('task', 'depends_on_task', 'created_at')
    search_fields = ('task__title', 'depends_on_task__title')
    raw_id_fields = ('task', 'depends_on_task')
    readonly_fields = ('created_at', 'updated_at')

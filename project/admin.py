from django.contrib import admin
from django_summernote.admin import SummernoteModelAdmin

from project.models import Project
from task.models import Task

# Register your models here.

class TaskInline(admin.TabularInline):
    model = Task
    fk_name = 'project'
    extra = 0
    fields = ('title', 'status', 'priority', 'progress', 'assignee')
    raw_id_fields = ('assignee',)
    show_change_link = True

@admin.register(Project)
class ProjectAdmin(SummernoteModelAdmin):
    list_display = ('name', 'owner', 'status', 'start_date', 'end_date', 'created_at', 'updated_at')
    search_fields = ('name', 'description', 'owner__username')
    list_filter = ('status',)
    raw_id_fields = ('owner',)
    inlines = [TaskInline]
    summernote_fields = ('description',)

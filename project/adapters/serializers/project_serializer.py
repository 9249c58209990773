from rest_framework import serializers
from project.models import Project, Status
from project.stats import task_stats
from task.adapters.serializers.task_serializer import TaskSerializer
from utils.validators import validate_date_order


class ProjectSerializer(serializers.ModelSerializer):
    startDate = serializers.DateTimeField(source='start_date', read_only=True)
    endDate = serializers.DateTimeField(source='end_date', read_only=True)
    ownerId = serializers.IntegerField(source='owner_id', read_only=True)
    createdAt = serializers.DateTimeField(source='created_at', read_only=True)
    updatedAt = serializers.DateTimeField(source='updated_at', read_only=True)
    taskStats = serializers.SerializerMethodField()

    class Meta:
        model = Project
        fields = (
            'id',
            'name',
            'description',
            'status',
            'startDate',
            'endDate',
            'ownerId',
            'createdAt',
            'updatedAt',
            'taskStats',
        )

    def get_taskStats(self, obj):
        return task_stats(obj)


class ProjectDetailSerializer(ProjectSerializer):
    tasks = TaskSerializer(many=True, read_only=True)

    class Meta(ProjectSerializer.Meta):
        fields = ProjectSerializer.Meta.fields + ('tasks',)


class ProjectWriteSerializer(serializers.ModelSerializer):
    name = serializers.CharField(max_length=100, error_messages={
        'required': 'Project name is required',
        'blank': 'Project name is required',
        'null': 'Project name is required',
        'max_length': 'Project name cannot exceed 100 characters',
    })
    description = serializers.CharField(
        max_length=1000,
        required=False,
        allow_blank=True,
        allow_null=True,
        error_messages={'max_length': 'Project description cannot exceed 1000 characters'},
    )
    status = serializers.ChoiceField(
        choices=Status.choices,
        required=False,
        error_messages={'invalid_choice': 'Invalid project status'},
    )
    startDate = serializers.DateTimeField(
        source='start_date',
        required=False,
        allow_null=True,
        error_messages={'invalid': 'Start date format is invalid'},
    )
    endDate = serializers.DateTimeField(
        source='end_date',
        required=False,
        allow_null=True,
        error_messages={'invalid': 'End date format is invalid'},
    )

    class Meta:
        model = Project
        fields = (
            'name',
            'description',
            'status',
            'startDate',
            'endDate',
        )

    def validate_description(self, value):
        return value or None

    def validate(self, attrs):
        validate_date_order(attrs, self.instance)
        return attrs

from rest_framework import serializers
from django.contrib.auth import get_user_model
from project.models import Project
from task.dependency_registry import add_dependencies
from task.models import Task, TaskDependency, Status, Priority
from task_file.adapters.serializers.task_file_serializer import TaskFileSerializer
from user.adapters.serializers.user_serializers import UserSerializer, UserSummarySerializer
from utils.validators import validate_date_order

User = get_user_model()


class TaskProjectSerializer(serializers.ModelSerializer):
    class Meta:
        model = Project
        fields = ['id', 'name',]


class TaskReferenceSerializer(serializers.ModelSerializer):
    class Meta:
        model = Task
        fields = ['id', 'title', 'status', 'priority']


class DependencySerializer(serializers.ModelSerializer):
    """An edge seen from the dependent task: shows the prerequisite."""
    taskId = serializers.IntegerField(source='task_id', read_only=True)
    dependsOnTaskId = serializers.IntegerField(source='depends_on_task_id', read_only=True)
    createdAt = serializers.DateTimeField(source='created_at', read_only=True)
    dependsOnTask = TaskReferenceSerializer(source='depends_on_task', read_only=True)

    class Meta:
        model = TaskDependency
        fields = ('id', 'taskId', 'dependsOnTaskId', 'createdAt', 'dependsOnTask')


class DependentSerializer(serializers.ModelSerializer):
    """An edge seen from the prerequisite: shows the task waiting on it."""
    taskId = serializers.IntegerField(source='task_id', read_only=True)
    dependsOnTaskId = serializers.IntegerField(source='depends_on_task_id', read_only=True)
    createdAt = serializers.DateTimeField(source='created_at', read_only=True)
    task = TaskReferenceSerializer(read_only=True)

    class Meta:
        model = TaskDependency
        fields = ('id', 'taskId', 'dependsOnTaskId', 'createdAt', 'task')


class TaskSerializer(serializers.ModelSerializer):
    startDate = serializers.DateTimeField(source='start_date', read_only=True)
    endDate = serializers.DateTimeField(source='end_date', read_only=True)
    projectId = serializers.IntegerField(source='project_id', read_only=True)
    assigneeId = serializers.IntegerField(source='assignee_id', read_only=True)
    parentTaskId = serializers.IntegerField(source='parent_task_id', read_only=True)
    createdAt = serializers.DateTimeField(source='created_at', read_only=True)
    updatedAt = serializers.DateTimeField(source='updated_at', read_only=True)
    project = TaskProjectSerializer(read_only=True)
    assignee = UserSummarySerializer(read_only=True)
    dependencies = DependencySerializer(many=True, read_only=True)
    dependents = DependentSerializer(many=True, read_only=True)
    fileCount = serializers.SerializerMethodField()

    class Meta:
        model = Task
        fields = (
            'id',
            'title',
            'description',
            'status',
            'priority',
            'startDate',
            'endDate',
            'progress',
            'projectId',
            'assigneeId',
            'parentTaskId',
            'createdAt',
            'updatedAt',
            'project',
            'assignee',
            'dependencies',
            'dependents',
            'fileCount',
        )

    def get_fileCount(self, obj):
        if hasattr(obj, 'file_count'):
            return obj.file_count
        return obj.files.count()


class TaskDetailSerializer(TaskSerializer):
    assignee = UserSerializer(read_only=True)
    subtasks = TaskReferenceSerializer(many=True, read_only=True)
    files = TaskFileSerializer(many=True, read_only=True)

    class Meta(TaskSerializer.Meta):
        fields = TaskSerializer.Meta.fields + ('subtasks', 'files')


class OwnedProjectField(serializers.PrimaryKeyRelatedField):
    default_error_messages = {
        'required': 'Project ID is required',
        'null': 'Project ID is required',
        'does_not_exist': 'Project not found or access denied',
        'incorrect_type': 'Project ID must be a positive integer',
    }

    def get_queryset(self):
        return Project.objects.filter(owner=self.context['request'].user)


class OwnedTaskField(serializers.PrimaryKeyRelatedField):
    default_error_messages = {
        'does_not_exist': 'Parent task not found or access denied',
        'incorrect_type': 'Parent task ID must be a positive integer',
    }

    def get_queryset(self):
        return Task.objects.filter(project__owner=self.context['request'].user)


class TaskWriteSerializer(serializers.ModelSerializer):
    title = serializers.CharField(max_length=200, error_messages={
        'required': 'Task title is required',
        'blank': 'Task title is required',
        'null': 'Task title is required',
        'max_length': 'Task title cannot exceed 200 characters',
    })
    description = serializers.CharField(
        max_length=2000,
        required=False,
        allow_blank=True,
        allow_null=True,
        error_messages={'max_length': 'Task description cannot exceed 2000 characters'},
    )
    status = serializers.ChoiceField(
        choices=Status.choices,
        required=False,
        error_messages={'invalid_choice': 'Invalid task status'},
    )
    priority = serializers.ChoiceField(
        choices=Priority.choices,
        required=False,
        error_messages={'invalid_choice': 'Invalid task priority'},
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
    progress = serializers.IntegerField(
        min_value=0,
        max_value=100,
        required=False,
        error_messages={
            'invalid': 'Progress must be an integer',
            'min_value': 'Progress must be between 0 and 100',
            'max_value': 'Progress must be between 0 and 100',
        },
    )
    assigneeId = serializers.PrimaryKeyRelatedField(
        source='assignee',
        queryset=User.objects.all(),
        required=False,
        allow_null=True,
        error_messages={
            'does_not_exist': 'Assignee does not exist',
            'incorrect_type': 'Assignee ID must be a positive integer',
        },
    )
    parentTaskId = OwnedTaskField(source='parent_task', required=False, allow_null=True)

    class Meta:
        model = Task
        fields = (
            'title',
            'description',
            'status',
            'priority',
            'startDate',
            'endDate',
            'progress',
            'assigneeId',
            'parentTaskId',
        )

    def validate_description(self, value):
        return value or None

    def validate(self, attrs):
        validate_date_order(attrs, self.instance)
        # completion always means full progress
        if attrs.get('status') == Status.COMPLETED:
            attrs['progress'] = 100
        return attrs


class TaskCreateSerializer(TaskWriteSerializer):
    projectId = OwnedProjectField(source='project')
    dependencies = serializers.ListField(
        child=serializers.IntegerField(min_value=1),
        required=False,
        write_only=True,
        error_messages={'not_a_list': 'Dependencies must be a list of task IDs'},
    )

    class Meta(TaskWriteSerializer.Meta):
        fields = TaskWriteSerializer.Meta.fields + ('projectId', 'dependencies')

    def validate_dependencies(self, value):
        ids = list(dict.fromkeys(value))
        owned = set(
            Task.objects.filter(project__owner=self.context['request'].user, id__in=ids)
            .values_list('id', flat=True)
        )
        missing = [task_id for task_id in ids if task_id not in owned]
        if missing:
            raise serializers.ValidationError(
                f"Dependency tasks not found or access denied: {', '.join(map(str, missing))}"
            )
        return ids

    def create(self, validated_data):
        dependency_ids = validated_data.pop('dependencies', [])
        task = super().create(validated_data)
        add_dependencies(task, dependency_ids)
        return task


class TaskUpdateSerializer(TaskWriteSerializer):
    def validate_parentTaskId(self, value):
        if value is not None and self.instance is not None and value.pk == self.instance.pk:
            raise serializers.ValidationError('A task cannot be its own parent')
        return value


class TaskProgressSerializer(serializers.Serializer):
    progress = serializers.IntegerField(min_value=0, max_value=100, error_messages={
        'required': 'Progress is required',
        'invalid': 'Progress must be an integer',
        'min_value': 'Progress must be between 0 and 100',
        'max_value': 'Progress must be between 0 and 100',
    })


class BatchStatusSerializer(serializers.Serializer):
    taskIds = serializers.ListField(
        child=serializers.IntegerField(min_value=1, error_messages={
            'invalid': 'Task IDs must be positive integers',
            'min_value': 'Task IDs must be positive integers',
        }),
        allow_empty=False,
        error_messages={
            'required': 'Task ID list cannot be empty',
            'empty': 'Task ID list cannot be empty',
            'not_a_list': 'Task ID list cannot be empty',
        },
    )
    status = serializers.ChoiceField(choices=Status.choices, error_messages={
        'required': 'Status is required',
        'invalid_choice': 'Invalid task status',
    })
    progress = serializers.IntegerField(min_value=0, max_value=100, required=False, error_messages={
        'invalid': 'Progress must be an integer',
        'min_value': 'Progress must be between 0 and 100',
        'max_value': 'Progress must be between 0 and 100',
    })


class DependencyWriteSerializer(serializers.Serializer):
    taskId = serializers.IntegerField(min_value=1, error_messages={
        'required': 'Task ID and dependency task ID are required',
        'invalid': 'Task ID must be a positive integer',
        'min_value': 'Task ID must be a positive integer',
    })
    dependsOnTaskId = serializers.IntegerField(min_value=1, error_messages={
        'required': 'Task ID and dependency task ID are required',
        'invalid': 'Dependency task ID must be a positive integer',
        'min_value': 'Dependency task ID must be a positive integer',
    })

"""
Serializers for scan task endpoints.
"""

from rest_framework import serializers


class FileNameField(serializers.Field):
    """
    A file reference sent either as a plain name or as ``{"name": ...}``.
    """

    default_error_messages = {
        "invalid": "Expected a file name or an object with a name.",
    }

    def to_internal_value(self, data):
        if isinstance(data, dict):
            data = data.get("name")
        if data is None:
            return None
        if not isinstance(data, str):
            self.fail("invalid")
        return data.strip()

    def to_representation(self, value):
        return value


class MachineSerializer(serializers.Serializer):
    """Serializer for the selected machine."""

    id = serializers.CharField(required=False, allow_blank=True, allow_null=True)
    name = serializers.CharField(required=False, allow_blank=True, allow_null=True)
    ip = serializers.CharField(required=False, allow_blank=True, allow_null=True)


class CreateTaskRequestSerializer(serializers.Serializer):
    """Serializer for create task request."""

    taskName = serializers.CharField(required=False, allow_blank=True, allow_null=True)
    listFile = FileNameField(required=False, allow_null=True)
    proxiesFile = FileNameField(required=False, allow_null=True)
    selectedMachine = MachineSerializer(required=False, allow_null=True)
    selectedThreads = serializers.IntegerField(required=False, allow_null=True, min_value=1)
    selectedTimeout = serializers.CharField(
        required=False, allow_blank=True, allow_null=True, max_length=20
    )
    startFrom = serializers.CharField(required=False, allow_blank=True, allow_null=True)


class UpdateTaskStatusRequestSerializer(serializers.Serializer):
    """Serializer for update task status request."""

    status = serializers.CharField(required=False, allow_blank=True, allow_null=True)


class TaskSerializer(serializers.Serializer):
    """Serializer for TaskDTO."""

    id = serializers.UUIDField()
    user_id = serializers.UUIDField()
    task_id = serializers.CharField()
    title = serializers.CharField()
    list_file = serializers.CharField()
    proxies_file = serializers.CharField(allow_null=True)
    machine_id = serializers.CharField(allow_null=True)
    machine_name = serializers.CharField(allow_null=True)
    machine_ip = serializers.CharField(allow_null=True)
    threads = serializers.IntegerField()
    timeout = serializers.CharField()
    start_from = serializers.CharField(allow_null=True)
    status = serializers.CharField()
    progress = serializers.IntegerField()
    created_at = serializers.DateTimeField()
    updated_at = serializers.DateTimeField()


class TaskListResponseSerializer(serializers.Serializer):
    """Serializer for task list response."""

    success = serializers.BooleanField()
    tasks = TaskSerializer(many=True)


class TaskResponseSerializer(serializers.Serializer):
    """Serializer for single task response."""

    success = serializers.BooleanField()
    task = TaskSerializer()

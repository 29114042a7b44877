"""
URL configuration for scan task endpoints.
"""

from django.urls import path

from api.v1.tasks import views

urlpatterns = [
    path("tasks", views.TaskListView.as_view(), name="tasks"),
    path("tasks/<uuid:task_id>", views.TaskDetailView.as_view(), name="task-detail"),
]

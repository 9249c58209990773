from django.urls import path
from .adapters.viewset.task_file_viewset import TaskFileViewSet

urlpatterns = [
    path('upload', TaskFileViewSet.as_view({'post': 'upload'}), name='task-file-upload'),
    path('task/<int:task_id>', TaskFileViewSet.as_view({'get': 'by_task'}), name='task-file-by-task'),
    path('download/<int:pk>', TaskFileViewSet.as_view({'get': 'download'}), name='task-file-download'),
    path('preview/<int:pk>', TaskFileViewSet.as_view({'get': 'preview'}), name='task-file-preview'),
    path('<int:pk>', TaskFileViewSet.as_view({'delete': 'destroy'}), name='task-file-detail'),
]

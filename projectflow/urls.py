"""
URL configuration for projectflow project.

Everything the client talks to lives under ``/api``; unknown ``/api`` paths
answer with the JSON envelope instead of Django's HTML page.
"""
from django.conf import settings
from django.conf.urls.static import static
from django.contrib import admin
from django.urls import include, path, re_path
from drf_spectacular.views import SpectacularAPIView, SpectacularSwaggerView

from projectflow.views import health
from utils.exception_handler import api_not_found

urlpatterns = [
    path('admin/', admin.site.urls),
    path('summernote/', include('django_summernote.urls')),

    path('api/health', health, name='health'),
    path('api/schema', SpectacularAPIView.as_view(), name='schema'),
    path('api/docs', SpectacularSwaggerView.as_view(url_name='schema'), name='swagger-ui'),

    path('api/auth/', include('user.urls')),
    path('api/files/', include('task_file.urls')),
    path('api/', include('project.urls')),
    path('api/', include('task.urls')),

    re_path(r'^api/.*$', api_not_found),
] + static(settings.MEDIA_URL, document_root=settings.MEDIA_ROOT)

handler404 = 'utils.exception_handler.api_not_found'
handler500 = 'utils.exception_handler.api_server_error'

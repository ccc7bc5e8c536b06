"""
URL configuration for task_sync project.
"""

from django.contrib import admin
from django.urls import path, include
from django.http import JsonResponse
from drf_spectacular.views import SpectacularAPIView, SpectacularRedocView, SpectacularSwaggerView


def home_view(request):
    """Root endpoint with API information."""
    return JsonResponse({
        'message': 'Welcome to Task Sync API',
        'version': '1.0.0',
        'endpoints': {
            'Tasks': 'GET, POST /api/tasks/',
            'Task': 'GET, PUT, DELETE /api/tasks/<id>/',
            'Task Status': 'PUT /api/tasks/<id>/status/',
            'Task Checklist': 'PUT /api/tasks/<id>/checklist/',
            'Dashboard': 'GET /api/dashboard/',
            'My Dashboard': 'GET /api/dashboard/user/',
            'Register': 'POST /api/auth/register/',
            'Profile': 'GET, PUT /api/auth/profile/',
            'API Documentation': '/api/docs/',
            'OpenAPI Schema': '/api/schema/',
        },
    })


urlpatterns = [
    path('', home_view, name='home'),
    path('admin/', admin.site.urls),
    path('api/', include('tasks.urls')),
    path('api/auth/', include('accounts.urls')),
    # OpenAPI/Swagger Documentation
    path('api/schema/', SpectacularAPIView.as_view(), name='schema'),
    path('api/docs/', SpectacularSwaggerView.as_view(url_name='schema'), name='swagger-ui'),
    path('api/redoc/', SpectacularRedocView.as_view(url_name='schema'), name='redoc'),
]

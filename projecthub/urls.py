# projecthub/urls.py
from django.conf import settings
from django.contrib import admin
from django.urls import path, include, re_path
from django.views.static import serve


urlpatterns = [
    path('admin/', admin.site.urls),
    # API (JSON)
    path('api/auth/', include('apps.core.urls')),
    path('api/users/', include('apps.core.user_urls')),
    path('api/projects/', include('apps.projects.urls')),
    path('api/tasks/', include('apps.tasks.urls')),
    path('api/milestones/', include('apps.milestones.urls')),
    path('api/timesheets/', include('apps.timesheets.urls')),
    path('api/files/', include('apps.files.urls')),
    path('api/discussions/', include('apps.discussions.urls')),
    path('api/notifications/', include('apps.notifications.urls')),
    path('api/dashboard/', include('apps.reports.dashboard_urls')),
    path('api/analytics/', include('apps.reports.analytics_urls')),
    # Załączniki serwowane statycznie z dysku
    re_path(r'^uploads/(?P<path>.*)$', serve, {'document_root': settings.MEDIA_ROOT}),
]

from django.urls import path
from . import views

urlpatterns = [
    path('', views.notification_list_view, name='notification_list'),
    path('unread-count/', views.unread_count_view, name='notification_unread_count'),
    path('mark-all-read/', views.mark_all_read_view, name='notification_mark_all_read'),
    path('<int:pk>/read/', views.mark_read_view, name='notification_mark_read'),
]

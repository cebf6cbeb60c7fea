from django.urls import path
from . import views
from apps.milestones import views as milestone_views
from apps.tasks import views as task_views

urlpatterns = [
    path('', views.project_collection_view, name='project_list'),
    path('<int:pk>/', views.project_detail_view, name='project_detail'),
    # Zasoby zagnieżdżone
    path('<int:project_id>/milestones/', milestone_views.project_milestones_view, name='project_milestones'),
    path('<int:project_id>/tasks/', task_views.project_tasks_view, name='project_tasks'),
]

from django.urls import path
from . import views

urlpatterns = [
    path('<int:pk>/', views.milestone_detail_view, name='milestone_detail'),
]

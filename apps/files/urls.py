from django.urls import path
from . import views

urlpatterns = [
    path('', views.file_collection_view, name='file_list'),
    path('<int:pk>/', views.file_detail_view, name='file_detail'),
]

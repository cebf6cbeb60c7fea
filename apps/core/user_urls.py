from django.urls import path
from . import views

urlpatterns = [
    path('', views.user_collection_view, name='user_list'),
]

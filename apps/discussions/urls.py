from django.urls import path
from . import views

urlpatterns = [
    path('', views.discussion_collection_view, name='discussion_list'),
]

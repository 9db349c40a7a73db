"""
URL configuration for the cmsite project.

Blocks are rendered by templates through the ``blocks_tags`` library; the
project itself only mounts the admin where blocks are managed.
"""
from django.contrib import admin
from django.urls import path

urlpatterns = [
    path('admin/', admin.site.urls),
]

"""
Products — Category URL Configuration

@file products/urls_categories.py
"""

from django.urls import path

from .views import CategoryListCreateView

app_name = 'categories'

urlpatterns = [
    path('', CategoryListCreateView.as_view(), name='category-list'),
]

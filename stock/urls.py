"""
Stock — URL Configuration

@file stock/urls.py
"""

from django.urls import path

from .views import MovementListCreateView

app_name = 'movements'

urlpatterns = [
    path('', MovementListCreateView.as_view(), name='movement-list'),
]

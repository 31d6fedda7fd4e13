"""
Order API URLs
"""

from django.urls import path

from . import views

urlpatterns = [
    path('', views.order_collection, name='order_list'),
    path('<int:order_id>/', views.order_detail, name='order_detail'),
]

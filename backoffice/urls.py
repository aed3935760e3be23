from django.contrib.auth import views as auth_views
from django.urls import path
from . import views

app_name = 'backoffice'

urlpatterns = [
    path('login/', views.LoginView.as_view(), name='login'),
    path('logout/', auth_views.LogoutView.as_view(), name='logout'),
    path('', views.dashboard, name='dashboard'),

    path('products/', views.product_list, name='product_list'),
    path('products/new/', views.product_form, name='product_create'),
    path('products/<int:pk>/', views.product_form, name='product_edit'),
    path('products/<int:pk>/delete/', views.product_delete, name='product_delete'),

    path('categories/', views.category_list, name='category_list'),
    path('categories/new/', views.category_form, name='category_create'),
    path('categories/<int:pk>/', views.category_form, name='category_edit'),
    path('categories/<int:pk>/delete/', views.category_delete, name='category_delete'),

    path('orders/', views.order_list, name='order_list'),
    path('orders/<uuid:order_id>/', views.order_detail, name='order_detail'),
    path('orders/<uuid:order_id>/status/', views.order_status, name='order_status'),
    path('orders/<uuid:order_id>/edit/', views.order_edit, name='order_edit'),
    path('orders/<uuid:order_id>/delete/', views.order_delete, name='order_delete'),
]

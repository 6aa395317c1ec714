# apps/donations/urls.py
from django.urls import path
from . import views

app_name = "donations"

urlpatterns = [
    # --- Public ---
    path('campaigns/', views.campaign_list, name='campaign_list'),
    path('campaigns/<int:campaign_id>/donate/', views.donate, name='donate'),

    # --- Admin ---
    path('', views.donation_list, name='donation_list'),
    path('<int:donation_id>/', views.donation_detail, name='donation_detail'),
    path('<int:donation_id>/verify/', views.verify_donation, name='verify_donation'),
]

# apps/hafalan/urls.py
from django.urls import path
from . import views

app_name = "hafalan"

urlpatterns = [
    # --- Records ---
    path('records/', views.record_list, name='record_list'),
    path('records/<int:record_id>/', views.record_detail, name='record_detail'),
    path('records/<int:record_id>/restore/', views.record_restore, name='record_restore'),

    # --- Progress & statistics ---
    path('students/<int:student_id>/progress/', views.student_progress, name='student_progress'),
    path('statistics/', views.statistics, name='statistics'),
]

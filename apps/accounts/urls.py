# apps/accounts/urls.py
from django.urls import path
from . import views

app_name = "accounts"

urlpatterns = [
    # --- Students ---
    path('students/', views.student_list, name='student_list'),
    path('students/<int:student_id>/', views.student_detail, name='student_detail'),
    path('students/<int:student_id>/restore/', views.student_restore, name='student_restore'),

    # --- Attendance ---
    path('attendance/', views.record_attendance, name='record_attendance'),
    path('students/<int:student_id>/attendance/', views.attendance_summary, name='attendance_summary'),
]

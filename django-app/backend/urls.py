from django.urls import path
from .views import *


urlpatterns = [
    path('interviews/', create_interview, name='create_interview'),
    path('interviews/history/', interview_history, name='interview_history'),
    path('interviews/<uuid:session_id>/', interview_report, name='interview_report'),
    path('interviews/<uuid:session_id>/start/', begin_interview, name='begin_interview'),
    path('interviews/<uuid:session_id>/submit/', submit_answers, name='submit_answers'),
    path('courses/', course_list, name='course_list'),
    path('courses/<int:course_id>/', course_detail, name='course_detail'),
]

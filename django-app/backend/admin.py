from django.contrib import admin
import json
from django.utils.safestring import mark_safe
from django.utils.html import escape
from .models import AdminCredentials, Course, InterviewSession, Video
from . import catalog


@admin.register(InterviewSession)
class InterviewSessionAdmin(admin.ModelAdmin):
    list_display = ('id', 'interview_type', 'session_status', 'overall_score', 'created_at', 'completed_at')
    list_filter = ('interview_type', 'session_status')
    readonly_fields = ('id', 'owner_id', 'created_at', 'updated_at', 'completed_at', 'formatted_evaluations')

    fieldsets = (
        ('Session', {
            'fields': ('id', 'owner_id', 'interview_type', 'job_role', 'question_count', 'session_status')
        }),
        ('Content', {
            'fields': ('questions', 'ideal_answers', 'user_answers')
        }),
        ('Scores', {
            'fields': ('overall_score', 'formatted_evaluations')
        }),
        ('Timestamps', {
            'fields': ('created_at', 'updated_at', 'completed_at')
        }),
    )

    def formatted_evaluations(self, obj):
        html = '<pre style="white-space: pre-wrap;">' + escape(json.dumps(obj.evaluations or [], indent=2)) + '</pre>'
        return mark_safe(html)

    formatted_evaluations.short_description = 'Evaluations'


@admin.register(AdminCredentials)
class AdminCredentialsAdmin(admin.ModelAdmin):
    list_display = ('id', 'has_key', 'updated_at')

    def has_key(self, obj):
        return bool(obj.openai_api_key)
    has_key.boolean = True
    has_key.short_description = 'API key set'


class VideoInline(admin.TabularInline):
    model = Video
    extra = 0


@admin.register(Course)
class CourseAdmin(admin.ModelAdmin):
    list_display = ('id', 'title', 'category', 'difficulty', 'is_published', 'created_at')
    list_filter = ('category', 'difficulty', 'is_published')
    search_fields = ('title',)
    inlines = [VideoInline]

    def save_model(self, request, obj, form, change):
        super().save_model(request, obj, form, change)
        catalog.invalidate_course(obj.pk)

    def save_related(self, request, form, formsets, change):
        super().save_related(request, form, formsets, change)
        catalog.invalidate_course(form.instance.pk)

    def delete_model(self, request, obj):
        course_id = obj.pk
        super().delete_model(request, obj)
        catalog.invalidate_course(course_id)

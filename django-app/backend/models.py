import uuid

from django.db import models

from mockinvi.schemas import InterviewCategory, InterviewSession as SessionRecord, SessionStatus


class AdminCredentials(models.Model):
	"""Centrally administered secrets. The newest row is the active one."""
	openai_api_key = models.CharField(max_length=255, blank=True, help_text="Key used for question generation and evaluation")
	updated_at = models.DateTimeField(auto_now=True)

	class Meta:
		verbose_name_plural = "admin credentials"

	def __str__(self):
		return f"Admin credentials (updated {self.updated_at:%Y-%m-%d %H:%M})"


class InterviewSession(models.Model):
	TYPE_CHOICES = [
		(InterviewCategory.BASIC_HR_TECHNICAL.value, "Basic HR + Technical"),
		(InterviewCategory.ROLE_BASED.value, "Role based"),
		(InterviewCategory.RESUME_BASED.value, "Resume based"),
	]
	STATUS_CHOICES = [
		(SessionStatus.CREATED.value, "Created"),
		(SessionStatus.IN_PROGRESS.value, "In progress"),
		(SessionStatus.COMPLETED.value, "Completed"),
	]

	id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
	owner_id = models.UUIDField(null=True, blank=True, db_index=True, help_text="Stable id derived from the auth identity")
	interview_type = models.CharField(max_length=32, choices=TYPE_CHOICES)
	question_count = models.PositiveIntegerField(default=0)
	job_role = models.CharField(max_length=255, null=True, blank=True)
	questions = models.JSONField(default=list)
	ideal_answers = models.JSONField(default=list)
	user_answers = models.JSONField(null=True, blank=True)
	evaluations = models.JSONField(default=list, blank=True)
	overall_score = models.FloatField(null=True, blank=True)
	session_status = models.CharField(max_length=16, choices=STATUS_CHOICES, default=SessionStatus.CREATED.value)
	created_at = models.DateTimeField(auto_now_add=True)
	updated_at = models.DateTimeField(auto_now=True)
	completed_at = models.DateTimeField(null=True, blank=True)

	class Meta:
		ordering = ['-created_at']

	def __str__(self):
		return f"{self.get_interview_type_display()} session {self.id} ({self.session_status})"

	def to_record(self) -> SessionRecord:
		return SessionRecord(
			id=str(self.id),
			owner_id=str(self.owner_id) if self.owner_id else None,
			interview_type=self.interview_type,
			question_count=self.question_count,
			job_role=self.job_role,
			questions=self.questions or [],
			ideal_answers=self.ideal_answers or [],
			user_answers=self.user_answers,
			evaluations=self.evaluations or [],
			overall_score=self.overall_score,
			session_status=self.session_status,
			created_at=self.created_at,
			updated_at=self.updated_at,
			completed_at=self.completed_at,
		)


class Course(models.Model):
	DIFFICULTY_CHOICES = [
		("beginner", "Beginner"),
		("intermediate", "Intermediate"),
		("advanced", "Advanced"),
	]

	title = models.CharField(max_length=255)
	description = models.TextField(blank=True)
	category = models.CharField(max_length=100, db_index=True)
	difficulty = models.CharField(max_length=16, choices=DIFFICULTY_CHOICES, default="beginner")
	is_published = models.BooleanField(default=True)
	created_at = models.DateTimeField(auto_now_add=True)
	updated_at = models.DateTimeField(auto_now=True)

	class Meta:
		ordering = ['-created_at']

	def __str__(self):
		return self.title


class Video(models.Model):
	course = models.ForeignKey(Course, on_delete=models.CASCADE, related_name="videos")
	title = models.CharField(max_length=255)
	video_url = models.URLField(max_length=500)
	duration_seconds = models.PositiveIntegerField(default=0)
	order_index = models.PositiveIntegerField(default=0)
	created_at = models.DateTimeField(auto_now_add=True)

	class Meta:
		ordering = ['order_index', 'id']

	def __str__(self):
		return f"{self.course.title} - {self.title}"

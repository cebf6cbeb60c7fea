# apps/files/models.py
from django.conf import settings
from django.db import models


class ProjectFile(models.Model):
    name = models.CharField(max_length=255)
    file = models.FileField(upload_to='project_files/%Y/%m/')
    project = models.ForeignKey(
        'projects.Project',
        on_delete=models.DO_NOTHING,
        db_constraint=False,
        related_name='files'
    )
    uploaded_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='uploaded_files'
    )
    size = models.PositiveBigIntegerField(default=0)
    type = models.CharField(max_length=100, blank=True)  # content type, np. application/pdf

    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ['-created_at', '-id']

    def __str__(self):
        return self.name

    @property
    def url(self):
        return self.file.url if self.file else None

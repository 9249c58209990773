import os
import random
import time

from django.conf import settings
from django.db import models

# Create your models here.

def stored_file_name(original_name):
    """``report.pdf`` -> ``report-1718000000000-123456789.pdf``"""
    stem, ext = os.path.splitext(os.path.basename(original_name))
    return f"{stem}-{int(time.time() * 1000)}-{random.randint(0, 10**9)}{ext}"


class TaskFile(models.Model):
    filename = models.CharField(max_length=255)
    original_name = models.CharField(max_length=255)
    file = models.FileField(upload_to='uploads/', max_length=500)
    file_size = models.PositiveIntegerField()
    mime_type = models.CharField(max_length=100)
    task = models.ForeignKey('task.Task', on_delete=models.CASCADE, related_name='files')
    uploaded_by = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name='uploaded_files')
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    def __str__(self):
        return self.original_name

    @property
    def is_image(self):
        return self.mime_type.startswith('image/')

    class Meta:
        ordering = ['-created_at']

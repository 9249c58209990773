from django.contrib.auth.models import AbstractUser
from django.db import models

# Create your models here.

class User(AbstractUser):
    email = models.EmailField(unique=True, null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    REQUIRED_FIELDS = []

    def save(self, *args, **kwargs):
        # the unique index must see NULL, not '', for users without an email
        if not self.email:
            self.email = None
        super().save(*args, **kwargs)

    def __str__(self):
        return self.username

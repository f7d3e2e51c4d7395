"""
Models for the users app.

A `UserProfile` model extends the built-in `auth.User` with the fields the
marketplace needs.  `firebase_uid` is the external subject issued by the
identity provider; every other part of the backend maps it to the
internal numeric user id through `users.identity`.
"""
from django.contrib.auth.models import User
from django.db import models


ROLE_USER = "user"


class UserProfile(models.Model):
    """Extension of Django's built-in User model."""

    user = models.OneToOneField(User, on_delete=models.CASCADE, related_name="profile")
    firebase_uid = models.CharField(max_length=128, unique=True)
    name = models.CharField(max_length=255, blank=True, default="")
    email = models.EmailField(blank=True, default="")
    image_url = models.URLField(max_length=1024, blank=True, null=True)
    role = models.CharField(max_length=32, default=ROLE_USER)
    skills = models.TextField(blank=True, default="")
    bio = models.TextField(blank=True, default="")
    created_at = models.DateTimeField(auto_now_add=True)

    def __str__(self) -> str:
        return f"Profile<{self.firebase_uid}>"

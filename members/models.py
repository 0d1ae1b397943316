from __future__ import annotations

from django.contrib.auth.models import AbstractUser
from django.db import models


class Member(AbstractUser):
    nickname = models.CharField(max_length=50, blank=True, default='')

    def __str__(self) -> str:
        return self.nickname or self.username

    class Meta:
        verbose_name = 'Member'
        verbose_name_plural = 'Members'

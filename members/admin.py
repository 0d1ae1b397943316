from django.contrib import admin
from django.contrib.auth.admin import UserAdmin

from members.models import Member


@admin.register(Member)
class MemberAdmin(UserAdmin):
    list_display = ('username', 'nickname', 'email', 'is_staff')
    search_fields = ('username', 'nickname', 'email')
    fieldsets = UserAdmin.fieldsets + (
        ('Profile', {'fields': ('nickname',)}),
    )

from django.contrib import admin
from django.contrib.auth.admin import UserAdmin as BaseUserAdmin
from .models import Organization, User


@admin.register(User)
class UserAdmin(BaseUserAdmin):
    list_display = ('email', 'name', 'role', 'organization', 'is_active')
    list_filter = ('role', 'organization', 'is_active')
    search_fields = ('email', 'name')
    fieldsets = BaseUserAdmin.fieldsets + (
        ('ProjectHub', {'fields': ('name', 'avatar', 'role', 'organization')}),
    )


@admin.register(Organization)
class OrganizationAdmin(admin.ModelAdmin):
    list_display = ('name', 'owner', 'plan', 'subscription_status', 'created_at')
    list_filter = ('plan', 'subscription_status')
    search_fields = ('name',)

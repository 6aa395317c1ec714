from django.contrib import admin, messages

from .softdelete import Repository


class SoftDeleteAdmin(admin.ModelAdmin):
    """
    ModelAdmin for tombstoned models.

    The changelist shows every row (filter on ``is_deleted``); deletes from the
    admin go through ``Repository`` so listed models are tombstoned, not erased.
    """
    soft_delete_fields = ('is_deleted', 'deleted_at', 'deleted_by')
    actions = ['restore_selected']

    def get_list_filter(self, request):
        return tuple(super().get_list_filter(request)) + ('is_deleted',)

    def get_readonly_fields(self, request, obj=None):
        return tuple(super().get_readonly_fields(request, obj)) + self.soft_delete_fields

    def delete_model(self, request, obj):
        Repository(type(obj), actor=request.user).delete({'pk': obj.pk})

    def delete_queryset(self, request, queryset):
        Repository(queryset.model, actor=request.user).delete_many(
            {'pk__in': list(queryset.values_list('pk', flat=True))}
        )

    @admin.action(description="Pulihkan data yang dipilih")
    def restore_selected(self, request, queryset):
        count = Repository(queryset.model).restore_many(
            {'pk__in': list(queryset.values_list('pk', flat=True))}
        )
        self.message_user(request, f"{count} data dipulihkan.", messages.SUCCESS)

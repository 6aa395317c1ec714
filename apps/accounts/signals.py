# apps/accounts/signals.py
from django.db.models.signals import post_save
from django.dispatch import receiver
from django.contrib.auth import get_user_model
from .models import Profile

User = get_user_model()

@receiver(post_save, sender=User)
def create_user_profile(sender, instance, created, **kwargs):
    """
    Create the Profile once, when a new User is created.
    """
    if created:
        Profile.objects.get_or_create(user=instance)


@receiver(post_save, sender=Profile)
def activate_user_when_teacher_status_changes(sender, instance: Profile, **kwargs):
    """
    Keep ``user.is_active`` in line with the teacher approval:
    - APPROVED teacher => user.is_active=True
    - any other teacher status => user.is_active=False
    Students and admins are left as they are.
    """
    user = instance.user

    if instance.role == Profile.ROLE_TEACHER:
        should_be_active = (instance.teacher_status == Profile.TEACHER_APPROVED)
        if user.is_active != should_be_active:
            user.is_active = should_be_active
            user.save(update_fields=["is_active"])

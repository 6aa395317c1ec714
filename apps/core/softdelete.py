"""
Soft delete (tombstone) support.

Models listed in ``settings.SOFT_DELETE_MODELS`` are never erased through the
normal path: a delete becomes an update that marks the row as deleted, and
default reads hide marked rows. All access goes through ``Repository`` so the
predicate rewriting happens in one place instead of per call site.

Predicates are plain dicts of ``QuerySet.filter`` keyword arguments::

    Repository(Profile).find_many({"role": "teacher"})
    Repository(Profile).find_many(only_deleted({"role": "teacher"}))
"""
import logging

from django.conf import settings
from django.core.exceptions import ValidationError
from django.db import models
from django.utils import timezone

logger = logging.getLogger(__name__)

DELETED_FIELD = "is_deleted"


# ========= Query helpers =========

def without_deleted(where=None):
    """Predicate that excludes tombstoned rows (the default for reads)."""
    return {**(where or {}), DELETED_FIELD: False}


def only_deleted(where=None):
    """Predicate that matches tombstoned rows only (recovery screens)."""
    return {**(where or {}), DELETED_FIELD: True}


def include_deleted(where=None):
    """Predicate unchanged: rows are returned regardless of tombstone state."""
    return dict(where or {})


def has_deleted_condition(where):
    return any(
        key == DELETED_FIELD or key.startswith(DELETED_FIELD + "__")
        for key in (where or {})
    )


def is_soft_deleted(record):
    return bool(record is not None and getattr(record, DELETED_FIELD, False))


def is_active(record):
    return record is not None and not is_soft_deleted(record)


def tracks_soft_delete(model):
    return model._meta.label in settings.SOFT_DELETE_MODELS


# ========= Abstract model =========

class SoftDeleteModel(models.Model):
    """Abstract base carrying the tombstone columns."""
    is_deleted = models.BooleanField(default=False, db_index=True)
    deleted_at = models.DateTimeField(null=True, blank=True)
    deleted_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        null=True,
        blank=True,
        on_delete=models.SET_NULL,
        related_name="+",
    )

    class Meta:
        abstract = True

    def clean(self):
        super().clean()
        if self.is_deleted and self.deleted_at is None:
            raise ValidationError({"deleted_at": "Record yang dihapus harus memiliki waktu penghapusan."})


# ========= Repository =========

class Repository:
    """
    Data access for one model.

    ``actor`` is the user performing the operation; it is stamped into
    ``deleted_by`` on tombstone writes. A missing or anonymous actor is not an
    error, the tombstone is written with ``deleted_by = None``.
    """

    def __init__(self, model, actor=None):
        self.model = model
        self.actor = actor

    @property
    def soft_delete(self):
        return tracks_soft_delete(self.model)

    @property
    def actor_user(self):
        if self.actor is None or not getattr(self.actor, "is_authenticated", False):
            return None
        return self.actor

    def _scope(self, action, where):
        """Rewrite a read predicate for ``action``.

        Only listed models are touched. An ``is_deleted`` condition supplied
        by the caller always wins over the injected default.
        """
        if not self.soft_delete:
            return dict(where or {})

        if action in ("find_unique", "find_first"):
            where = dict(where or {})
            if not has_deleted_condition(where):
                where[DELETED_FIELD] = False
            return where

        if action == "find_many":
            if where is None:
                return {DELETED_FIELD: False}
            where = dict(where)
            if not has_deleted_condition(where):
                where[DELETED_FIELD] = False
            return where

        return dict(where or {})

    def _tombstone_data(self, deleted_by=None):
        return {
            DELETED_FIELD: True,
            "deleted_at": timezone.now(),
            "deleted_by": deleted_by if deleted_by is not None else self.actor_user,
        }

    @staticmethod
    def _require_where(where, operation):
        if not where:
            raise ValueError(f"{operation}: where clause is required and cannot be empty")

    @property
    def objects(self):
        return self.model._default_manager.all()

    # ---- reads ----

    # scoped=False skips the injected default, e.g. for "show everything" admin views.
    def _filter(self, action, where, scoped):
        where = self._scope(action, where) if scoped else include_deleted(where)
        return self.objects.filter(**where)

    def find_unique(self, where, scoped=True):
        return self._filter("find_unique", where, scoped).first()

    def find_first(self, where=None, order_by=None, scoped=True):
        qs = self._filter("find_first", where, scoped)
        if order_by:
            qs = qs.order_by(*order_by)
        return qs.first()

    def find_many(self, where=None, order_by=None, scoped=True):
        qs = self._filter("find_many", where, scoped)
        if order_by:
            qs = qs.order_by(*order_by)
        return qs

    def count(self, where=None, scoped=True):
        return self.find_many(where, scoped=scoped).count()

    def exists(self, where=None, scoped=True):
        return self.find_many(where, scoped=scoped).exists()

    # ---- writes ----

    def create(self, **data):
        return self.objects.create(**data)

    def update(self, where, data):
        obj = self.objects.get(**where)
        for field, value in data.items():
            setattr(obj, field, value)
        obj.save()
        return obj

    def update_many(self, where, data):
        return self.objects.filter(**(where or {})).update(**data)

    def upsert(self, where, defaults):
        """Create-or-update across all rows; the tombstone state is left as is."""
        obj, _ = self.objects.update_or_create(defaults=defaults, **where)
        return obj

    def delete(self, where, deleted_by=None):
        self._require_where(where, "delete")
        if not self.soft_delete:
            obj = self.objects.get(**where)
            obj.delete()
            return obj

        obj = self.update(where, self._tombstone_data(deleted_by))
        logger.info(
            "Tombstoned %s pk=%s (deleted_by=%s)",
            self.model._meta.label, obj.pk, obj.deleted_by_id,
        )
        return obj

    def delete_many(self, where, deleted_by=None):
        self._require_where(where, "delete_many")
        if not self.soft_delete:
            count, _ = self.objects.filter(**where).delete()
            return count

        count = self.update_many(where, self._tombstone_data(deleted_by))
        logger.info("Tombstoned %d %s row(s)", count, self.model._meta.label)
        return count

    def restore(self, where):
        self._require_where(where, "restore")
        obj = self.update(where, {DELETED_FIELD: False, "deleted_at": None, "deleted_by": None})
        logger.info("Restored %s pk=%s", self.model._meta.label, obj.pk)
        return obj

    def restore_many(self, where):
        self._require_where(where, "restore_many")
        count = self.update_many(where, {DELETED_FIELD: False, "deleted_at": None, "deleted_by": None})
        logger.info("Restored %d %s row(s)", count, self.model._meta.label)
        return count

    def force_delete(self, where):
        """Physically remove one row. Irreversible."""
        self._require_where(where, "force_delete")
        obj = self.objects.get(**where)
        pk = obj.pk
        obj.delete()
        logger.warning("Force deleted %s pk=%s", self.model._meta.label, pk)
        return obj

    def force_delete_many(self, where):
        self._require_where(where, "force_delete_many")
        count, _ = self.objects.filter(**where).delete()
        logger.warning("Force deleted %d %s row(s)", count, self.model._meta.label)
        return count

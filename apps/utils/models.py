# utils/models.py

from django.db import models
import logging

logger = logging.getLogger(__name__)

# =============================================================================
# BASE MODEL
# =============================================================================

class BaseModel(models.Model):
    """
    Abstract base model shared by every Open Hands entity.

    Features:
    - Integer auto primary key (the highest id is the most recent record)
    - Creation and last-update timestamps
    - Consistent debug logging on save and delete

    Records are plain rows: there is no soft delete and no audit trail.
    Deleting a record removes it.
    """

    # Timestamp fields
    created_at = models.DateTimeField("Created At", auto_now_add=True, db_index=True)
    updated_at = models.DateTimeField("Updated At", auto_now=True)

    class Meta:
        abstract = True

    def save(self, *args, **kwargs):
        is_new = self._state.adding
        result = super().save(*args, **kwargs)
        logger.debug(
            f"{'Created' if is_new else 'Updated'} {self.__class__.__name__} {self.pk}"
        )
        return result

    def delete(self, *args, **kwargs):
        pk = self.pk
        result = super().delete(*args, **kwargs)
        logger.debug(f"Deleted {self.__class__.__name__} {pk}")
        return result

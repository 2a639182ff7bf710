from django.db import models
from django.core.validators import MinValueValidator, MaxValueValidator
import uuid


class Review(models.Model):
    """
    Rating left by one party of a completed transaction for the other.

    Buyer and seller can each review a transaction once.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    transaction = models.ForeignKey('transactions.Transaction', on_delete=models.CASCADE, related_name='reviews')
    reviewer = models.ForeignKey('accounts.User', on_delete=models.CASCADE, related_name='reviews_given')
    reviewed = models.ForeignKey('accounts.User', on_delete=models.CASCADE, related_name='reviews_received')
    rating = models.PositiveSmallIntegerField(validators=[MinValueValidator(1), MaxValueValidator(5)])
    comment = models.TextField(blank=True)
    is_buyer_review = models.BooleanField()
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'reviews'
        ordering = ['-created_at']
        indexes = [
            models.Index(fields=['reviewed', 'created_at']),
            models.Index(fields=['reviewer', 'created_at']),
        ]
        constraints = [
            models.UniqueConstraint(fields=['transaction', 'reviewer'], name='one_review_per_party'),
            models.CheckConstraint(
                condition=models.Q(rating__gte=1) & models.Q(rating__lte=5),
                name='review_rating_range',
            ),
        ]

    def __str__(self):
        return f"{self.reviewer} -> {self.reviewed} ({self.rating}★)"

    @property
    def stars(self):
        return '★' * self.rating + '☆' * (5 - self.rating)

    def is_positive(self):
        return self.rating >= 4

    def is_negative(self):
        return self.rating <= 2

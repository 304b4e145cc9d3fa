from django.db import models


class Tenant(models.Model):
    """A restaurant account; every loyalty record is scoped to one tenant"""
    name = models.CharField(max_length=200)
    slug = models.SlugField(max_length=100, unique=True)
    is_active = models.BooleanField(default=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'tenants'
        ordering = ['name']
        verbose_name = 'Tenant'
        verbose_name_plural = 'Tenants'

    def __str__(self):
        return self.name

    @classmethod
    def get_active_by_slug(cls, slug):
        """Get active tenant by slug"""
        return cls.objects.filter(slug=slug, is_active=True).first()

from django.db import models


class Client(models.Model):
    first_name = models.CharField(max_length=100, blank=True)
    last_name = models.CharField(max_length=100, blank=True)
    email = models.EmailField(unique=True)

    class Meta:
        app_label = "test_app"
        verbose_name_plural = "clients"


class Invoice(models.Model):
    client = models.ForeignKey(Client, on_delete=models.CASCADE, related_name="invoices")
    total = models.DecimalField(max_digits=10, decimal_places=2, default=0)

    class Meta:
        app_label = "test_app"
        verbose_name_plural = "invoices"

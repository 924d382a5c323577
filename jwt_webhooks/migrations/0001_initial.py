from django.db import migrations, models


class Migration(migrations.Migration):
    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="WebhookActivity",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("message", models.TextField()),
                ("subject_id", models.CharField(db_index=True, default="0", max_length=64)),
                ("created_at", models.DateTimeField(auto_now_add=True, db_index=True)),
            ],
            options={
                "verbose_name": "Webhook Activity",
                "verbose_name_plural": "Webhook Activity",
                "db_table": "jwt_webhooks_activity",
                "ordering": ["-created_at", "-id"],
            },
        ),
    ]

from django.db import migrations, models


class Migration(migrations.Migration):

    dependencies = [
        ("users", "0001_initial"),
    ]

    operations = [
        migrations.AddField(
            model_name="userprofile",
            name="role",
            field=models.CharField(default="user", max_length=32),
        ),
        migrations.AddField(
            model_name="userprofile",
            name="skills",
            field=models.TextField(blank=True, default=""),
        ),
    ]

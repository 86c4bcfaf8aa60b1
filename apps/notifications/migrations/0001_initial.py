# Generated manually for the canteen notifications app

import uuid
from django.db import migrations, models
import django.db.models.deletion


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ('students', '0001_initial'),
    ]

    operations = [
        migrations.CreateModel(
            name='Notification',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('message', models.TextField()),
                ('type', models.CharField(choices=[('subscription_purchased', 'Abonnement acheté'), ('subscription_expired', 'Abonnement expiré'), ('meal_served', 'Repas servi')], max_length=30)),
                ('details', models.JSONField(blank=True, default=dict)),
                ('read', models.BooleanField(default=False)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('canteen_student', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='notifications', to='students.canteenstudent')),
            ],
            options={
                'db_table': 'notifications',
                'ordering': ['-created_at'],
                'indexes': [
                    models.Index(fields=['canteen_student', 'created_at'], name='notif_student_created_idx'),
                    models.Index(fields=['canteen_student', 'read'], name='notif_student_read_idx'),
                ],
            },
        ),
    ]

# Generated manually for the canteen subscriptions app

import uuid
from decimal import Decimal
from django.core.validators import MinValueValidator
from django.db import migrations, models
import django.db.models.deletion


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ('students', '0001_initial'),
    ]

    operations = [
        migrations.CreateModel(
            name='Subscription',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('duration', models.PositiveIntegerField(default=0, help_text='Length in days')),
                ('price', models.DecimalField(decimal_places=2, default=Decimal('0.00'), max_digits=10, validators=[MinValueValidator(Decimal('0.00'))])),
                ('tariff_type', models.CharField(blank=True, max_length=30)),
                ('start_date', models.DateTimeField(blank=True, null=True)),
                ('end_date', models.DateTimeField(blank=True, null=True)),
                ('status', models.CharField(choices=[('active', 'Actif'), ('expired', 'Expiré')], default='expired', max_length=10)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('canteen_student', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='subscriptions', to='students.canteenstudent')),
            ],
            options={
                'db_table': 'subscriptions',
                'ordering': ['-created_at'],
                'indexes': [
                    models.Index(fields=['status', 'end_date'], name='subscription_status_end_idx'),
                    models.Index(fields=['canteen_student', 'status'], name='subscription_student_idx'),
                ],
                'constraints': [
                    models.UniqueConstraint(
                        condition=models.Q(('status', 'active')),
                        fields=('canteen_student',),
                        name='one_active_subscription_per_student',
                    ),
                ],
            },
        ),
    ]

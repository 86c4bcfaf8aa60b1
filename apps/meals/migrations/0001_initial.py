# Generated manually for the canteen meals app

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
            name='MealRecord',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('served_at', models.DateTimeField()),
                ('served_on', models.DateField()),
                ('served', models.BooleanField(default=True)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('canteen_student', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='meals', to='students.canteenstudent')),
            ],
            options={
                'db_table': 'meal_records',
                'ordering': ['served_on'],
                'indexes': [models.Index(fields=['served_on'], name='meal_served_on_idx')],
                'constraints': [
                    models.UniqueConstraint(
                        fields=('canteen_student', 'served_on'),
                        name='one_meal_per_student_per_day',
                    ),
                ],
            },
        ),
    ]

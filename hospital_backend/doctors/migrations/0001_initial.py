from django.db import migrations, models

import hospital_backend.core.validators


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name='Doctor',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('first_name', models.CharField(max_length=100, validators=[hospital_backend.core.validators.validate_alphanumeric_name])),
                ('family_name', models.CharField(max_length=100, validators=[hospital_backend.core.validators.validate_alphanumeric_name])),
                ('date_of_birth', models.DateField(blank=True, null=True)),
                ('expertise', models.JSONField(default=list)),
                ('gender', models.JSONField(default=list)),
                ('extra_info', models.TextField(blank=True, default='')),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
            ],
            options={
                'verbose_name': 'Doctor',
                'verbose_name_plural': 'Doctors',
                'db_table': 'doctors_doctor',
                'ordering': ['family_name', 'first_name', 'id'],
            },
        ),
    ]

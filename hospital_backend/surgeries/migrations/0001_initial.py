from django.db import migrations, models
import django.db.models.deletion


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ('doctors', '0001_initial'),
        ('patients', '0001_initial'),
    ]

    operations = [
        migrations.CreateModel(
            name='Surgery',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('title', models.CharField(max_length=255)),
                ('date', models.DateTimeField(db_index=True)),
                ('summary', models.TextField()),
                ('active', models.BooleanField(db_index=True, default=False)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                (
                    'patient',
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name='surgeries',
                        to='patients.patient',
                    ),
                ),
                ('doctors', models.ManyToManyField(related_name='surgeries', to='doctors.doctor')),
            ],
            options={
                'verbose_name': 'Surgery',
                'verbose_name_plural': 'Surgeries',
                'db_table': 'surgeries_surgery',
                'ordering': ['date', 'id'],
                'indexes': [
                    models.Index(fields=['active', 'date'], name='surgery_active_date_idx'),
                ],
            },
        ),
    ]

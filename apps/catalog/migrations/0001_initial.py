import uuid

from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name='Fruit',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('name', models.CharField(max_length=255)),
                ('price', models.DecimalField(decimal_places=2, max_digits=12)),
                ('stock', models.IntegerField(default=0)),
                ('image', models.URLField(blank=True, default='', max_length=500)),
            ],
            options={
                'ordering': ['name'],
                'indexes': [
                    models.Index(fields=['name'], name='fruit_name_idx'),
                    models.Index(fields=['stock'], name='fruit_stock_idx'),
                ],
                'constraints': [
                    models.CheckConstraint(condition=models.Q(stock__gte=0), name='fruit_stock_non_negative'),
                    models.CheckConstraint(condition=models.Q(price__gt=0), name='fruit_price_positive'),
                ],
            },
        ),
    ]

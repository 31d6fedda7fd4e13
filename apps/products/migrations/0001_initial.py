import decimal

import django.core.validators
import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name='Product',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('title', models.CharField(help_text='Product title shown to buyers', max_length=200)),
                ('price', models.DecimalField(decimal_places=2, default=decimal.Decimal('0.00'), help_text='Unit price', max_digits=10, validators=[django.core.validators.MinValueValidator(decimal.Decimal('0.00'))])),
                ('published', models.BooleanField(default=False, help_text='Visible in the public catalog')),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('user', models.ForeignKey(help_text='User who listed the product', on_delete=django.db.models.deletion.CASCADE, related_name='products', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'verbose_name': 'Product',
                'verbose_name_plural': 'Products',
                'db_table': 'products',
                'ordering': ('id',),
                'indexes': [models.Index(fields=['user', 'published'], name='products_user_pub_idx')],
                'constraints': [models.CheckConstraint(condition=models.Q(('price__gte', 0)), name='products_price_non_negative')],
            },
        ),
    ]

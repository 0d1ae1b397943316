import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ('cocktails', '0001_initial'),
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name='Custom',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('name', models.CharField(max_length=100)),
                ('comment', models.TextField(blank=True, default='')),
                ('recipe', models.TextField(blank=True, default='')),
                ('summary', models.CharField(blank=True, default='', max_length=255)),
                ('open', models.BooleanField(default=True)),
                ('image', models.CharField(blank=True, default='', max_length=500)),
                ('created', models.DateTimeField(auto_now_add=True)),
                ('updated', models.DateTimeField(auto_now=True)),
                ('cocktail', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='customs', to='cocktails.cocktail')),
                ('member', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='customs', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'verbose_name': 'Custom cocktail',
                'verbose_name_plural': 'Custom cocktails',
                'ordering': ['-id'],
            },
        ),
        migrations.CreateModel(
            name='CustomIngredient',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('amount', models.FloatField()),
                ('custom', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='custom_ingredients', to='customs.custom')),
                ('ingredient', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='custom_ingredients', to='cocktails.ingredient')),
                ('unit', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='custom_ingredients', to='cocktails.unit')),
            ],
            options={
                'verbose_name': 'Custom ingredient',
                'verbose_name_plural': 'Custom ingredients',
                'ordering': ['id'],
            },
        ),
    ]

from django.contrib import admin

from experiences.models import Booking, Experience, Slot


class SlotInline(admin.TabularInline):
    model = Slot
    extra = 1


@admin.register(Experience)
class ExperienceAdmin(admin.ModelAdmin):
    list_display = ["title", "location", "price", "created_at"]
    search_fields = ["title", "location"]
    inlines = [SlotInline]


@admin.register(Booking)
class BookingAdmin(admin.ModelAdmin):
    list_display = ["experience_title", "email", "date", "time", "quantity", "total", "status"]
    list_filter = ["status", "experience"]
    search_fields = ["email", "full_name"]
    readonly_fields = [
        "price_per_person",
        "subtotal",
        "discount",
        "total",
        "promo_code",
        "created_at",
        "updated_at",
    ]

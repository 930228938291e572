import django_filters

from modules.customers.models import Customer


class CustomerFilter(django_filters.FilterSet):
    first_name = django_filters.CharFilter(field_name="first_name", lookup_expr="icontains")
    last_name = django_filters.CharFilter(field_name="last_name", lookup_expr="icontains")
    dni = django_filters.CharFilter(field_name="dni", lookup_expr="exact")
    email = django_filters.CharFilter(field_name="email", lookup_expr="iexact")

    class Meta:
        model = Customer
        fields = ["first_name", "last_name", "dni", "email"]

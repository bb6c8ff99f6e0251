"""
Views for the Hotels app.
"""
import logging

from rest_framework import serializers
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from apps.hotels.services.hotels_com import search_hotels

logger = logging.getLogger(__name__)


class HotelOfferQuerySerializer(serializers.Serializer):
    lat = serializers.FloatField(min_value=-90, max_value=90)
    lng = serializers.FloatField(min_value=-180, max_value=180)
    checkIn = serializers.CharField()
    checkOut = serializers.CharField(required=False, allow_blank=True)
    adults = serializers.IntegerField(required=False, min_value=1)
    radius = serializers.FloatField(required=False, min_value=0)
    currency = serializers.CharField(required=False, max_length=3)
    limit = serializers.IntegerField(required=False, min_value=1, max_value=100)


class HotelOfferSearchView(APIView):
    """
    Bookable hotel offers near a trip day's coordinates.

    GET /api/hotels/?lat=38.72&lng=-9.14&checkIn=2025-06-02&adults=2
    """
    permission_classes = [IsAuthenticated]

    def get(self, request):
        serializer = HotelOfferQuerySerializer(data=request.query_params)
        serializer.is_valid(raise_exception=True)
        params = serializer.validated_data

        hotels, source = search_hotels(
            latitude=params['lat'],
            longitude=params['lng'],
            check_in=params['checkIn'],
            check_out=params.get('checkOut') or None,
            adults=params.get('adults'),
            radius_km=params.get('radius'),
            currency=params.get('currency'),
            limit=params.get('limit'),
        )
        logger.debug('Hotel search for %s returned %d offers (%s)', request.user.id, len(hotels), source)
        return Response({'success': True, 'hotels': hotels, 'source': source})

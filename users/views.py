"""
Profile endpoints for the users app.

`/api/users/me/` syncs and edits the caller's own profile; the caller
only needs a valid token here because this is where the local user row
gets created.  `/api/users/public/<uid>/` is readable without a token.
"""
from rest_framework import status
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response
from rest_framework.throttling import AnonRateThrottle
from rest_framework.views import APIView

from .authentication import FirebaseSubjectAuthentication
from .identity import UserNotFound
from .models import UserProfile
from .serializers import MeSerializer, PublicProfileSerializer, SyncMeSerializer
from .services import sync_user_from_claims
from .throttling import SubjectRateThrottle


class MeView(APIView):
    """
    GET  /api/users/me/   -> caller profile (404 until synced)
    POST /api/users/me/   -> create or sync from token claims; body {"name"}
    PUT  /api/users/me/   -> update name / skills / bio / image_url
    """
    authentication_classes = [FirebaseSubjectAuthentication]
    throttle_classes = [AnonRateThrottle, SubjectRateThrottle]
    permission_classes = [IsAuthenticated]

    def _profile(self, request):
        profile = (
            UserProfile.objects.select_related("user")
            .filter(firebase_uid=request.user.uid)
            .first()
        )
        if profile is None:
            raise UserNotFound()
        return profile

    def get(self, request):
        return Response(MeSerializer(self._profile(request)).data)

    def post(self, request):
        ser = SyncMeSerializer(data=request.data or {})
        ser.is_valid(raise_exception=True)
        profile, created = sync_user_from_claims(
            request.user.claims, name=ser.validated_data.get("name")
        )
        return Response(
            MeSerializer(profile).data,
            status=status.HTTP_201_CREATED if created else status.HTTP_200_OK,
        )

    def put(self, request):
        profile = self._profile(request)
        ser = MeSerializer(profile, data=request.data, partial=True)
        ser.is_valid(raise_exception=True)
        ser.save()
        return Response(ser.data)


class PublicProfileView(APIView):
    """GET /api/users/public/<uid>/"""
    authentication_classes = []
    permission_classes = [AllowAny]

    def get(self, request, uid: str):
        profile = UserProfile.objects.filter(firebase_uid=uid).first()
        if profile is None:
            raise UserNotFound()
        return Response(PublicProfileSerializer(profile).data)

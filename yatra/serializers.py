from rest_framework import serializers
from django.contrib.auth.models import User
from django.urls import reverse

from .auth_jwt import role_for
from .models import Submission
from .storage import public_url

# --- Users ---

class RegisterSerializer(serializers.Serializer):
    email = serializers.EmailField()
    password = serializers.CharField(write_only=True, min_length=1)
    name = serializers.CharField(max_length=150)

    def validate_email(self, value):
        value = value.strip().lower()
        if User.objects.filter(username__iexact=value).exists() or User.objects.filter(email__iexact=value).exists():
            raise serializers.ValidationError("User already exists")
        return value

    def create(self, validated_data):
        first, _, last = validated_data["name"].strip().partition(" ")
        return User.objects.create_user(
            username=validated_data["email"],
            email=validated_data["email"],
            password=validated_data["password"],
            first_name=first[:150],
            last_name=last[:150],
        )


class UserSerializer(serializers.ModelSerializer):
    userId = serializers.CharField(source="id", read_only=True)
    name = serializers.SerializerMethodField()
    role = serializers.SerializerMethodField()

    class Meta:
        model = User
        fields = ["userId", "email", "name", "role"]

    def get_name(self, obj):
        return obj.get_full_name() or obj.username

    def get_role(self, obj):
        return role_for(obj)


# --- Submissions ---

class SubmissionSerializer(serializers.ModelSerializer):
    """Wire shape the clients expect (camelCase, pdfUrl is the public URL only)."""
    userId = serializers.CharField(source="user_id", read_only=True)
    pdfUrl = serializers.SerializerMethodField()
    downloadUrl = serializers.SerializerMethodField()
    adminMessage = serializers.CharField(source="admin_message", read_only=True)
    createdAt = serializers.DateTimeField(source="created_at", read_only=True)
    updatedAt = serializers.DateTimeField(source="updated_at", read_only=True)

    class Meta:
        model = Submission
        fields = ["id", "userId", "status", "data", "pdfUrl", "downloadUrl",
                  "adminMessage", "createdAt", "updatedAt"]

    def get_pdfUrl(self, obj):
        return public_url(obj.pdf_url)

    def get_downloadUrl(self, obj):
        if obj.is_approved and obj.pdf_url:
            return reverse("submission_download", kwargs={"submission_id": obj.id})
        return None


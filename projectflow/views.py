from django.utils import timezone
from rest_framework.decorators import api_view, authentication_classes, permission_classes
from rest_framework.permissions import AllowAny

from utils.response import success_response


@api_view(['GET'])
@authentication_classes([])
@permission_classes([AllowAny])
def health(request):
    return success_response('ProjectFlow API is running', {
        'status': 'ok',
        'timestamp': timezone.now().isoformat(),
    })

from django.http import JsonResponse


def index(request):
    return JsonResponse({"message": "API is running", "status": "ok"})


def api_root(request):
    return JsonResponse({"message": "Yes connected"})

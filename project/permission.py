from rest_framework.permissions import BasePermission


class IsProjectOwner(BasePermission):
    """
    Object-level permission: only the owner of the project an object belongs
    to may read or change it.

    Works for projects, tasks and task files. Viewsets already scope their
    querysets to the caller's projects; this guards the object itself.
    """

    def has_permission(self, request, view):
        user = getattr(request, "user", None)
        return bool(user and user.is_authenticated)

    def has_object_permission(self, request, view, obj):
        return owner_id_of(obj) == request.user.id


def owner_id_of(obj):
    if hasattr(obj, "owner_id"):
        return obj.owner_id
    if hasattr(obj, "project"):
        return obj.project.owner_id
    if hasattr(obj, "task"):
        return obj.task.project.owner_id
    return None

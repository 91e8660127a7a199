"""Host user/group lookup for deltabuild."""

import grp
import os
import pwd

from deltabuild.errors import BuildError
from deltabuild.errors_catalog import actionable_error
from deltabuild.models import HostIdentity


class IdentityService:
    """Resolves the invoking user the way `id -u`, `id -g`, `id -un` and `id -ng` do."""

    def __init__(self, logger, os_module=os, pwd_module=pwd, grp_module=grp):
        self.logger = logger
        self.os = os_module
        self.pwd = pwd_module
        self.grp = grp_module

    def resolve(self) -> HostIdentity:
        uid = self.os.geteuid()
        gid = self.os.getegid()

        try:
            user_name = self.pwd.getpwuid(uid).pw_name
        except KeyError as exc:
            raise BuildError(actionable_error("identity_unresolved", kind="user", ident=uid)) from exc

        try:
            group_name = self.grp.getgrgid(gid).gr_name
        except KeyError as exc:
            raise BuildError(actionable_error("identity_unresolved", kind="group", ident=gid)) from exc

        identity = HostIdentity(uid=uid, gid=gid, user_name=user_name, group_name=group_name)
        self.logger.debug(
            "Resolved host identity: uid=%s gid=%s user=%s group=%s",
            identity.uid,
            identity.gid,
            identity.user_name,
            identity.group_name,
        )
        return identity

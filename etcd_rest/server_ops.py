import simplejson

from etcd_rest.common_ops import CommonOps
from etcd_rest.request import O_VERSION


class ServerOps(CommonOps):
    """Functions that query the server for member-level information."""

    def get_version(self):
        """Return a string representing the version of the server that we're
        connected to.

        :returns: Version
        :rtype: string

        :raises: ValueError
        """

        version_string = self.get_text(O_VERSION).strip()

        # Older servers answer "etcd v2.0.0", newer ones a JSON document.
        prefix = 'etcd v'

        if version_string.startswith(prefix):
            return version_string[len(prefix):]
        elif version_string.startswith('{'):
            version_doc = simplejson.loads(version_string)
            version_property = version_doc.get('etcdserver')
            if not version_property:
                raise ValueError("Invalid version response: %s" % (version_string))
            return version_property
        else:
            raise ValueError("Could not parse server version from: %s" % (version_string))

from etcd_rest.common_ops import CommonOps
from etcd_rest.request import O_STATS


class StatOps(CommonOps):
    """Functions that return the statistics documents of the member we're
    connected to. Each returns the decoded JSON as a dictionary."""

    def get_leader_stats(self):
        """Return the leader's view of its followers.

        :rtype: dict
        """

        return self.get_json(O_STATS, '/leader')

    def get_self_stats(self):
        """Return statistics about the member itself.

        :rtype: dict
        """

        return self.get_json(O_STATS, '/self')

    def get_store_stats(self):
        """Return operation counters of the key space.

        :rtype: dict
        """

        return self.get_json(O_STATS, '/store')

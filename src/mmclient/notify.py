""" Split the notification channel into per-topic and per-device streams.
"""

from .stream import Stream


class NotificationDemuxer:
    """ Every decoded notification is handed to :func:`feed`, which passes
        it to each subscription whose filter matches. Subscriptions are
        independent of one another: two subscribers on the same topic both
        receive every matching notification.

        Nothing is buffered for topics without a subscriber; a subscription
        only ever sees notifications that arrive after it was created.
    """

    def __init__(self):

        self.notifications = Stream('notifications')


    def feed(self, notification):
        """ Distribute a newly arrived :class:`Notification`.
        """

        self.notifications.publish(notification)


    def topic(self, topic, device_address=None, callback=None):
        """ Return a :class:`mmclient.stream.Subscription` receiving the
            notifications whose topic equals *topic*. The comparison is
            case-sensitive and exact; there are no wildcards. If a
            *device_address* is specified only notifications from that
            device are delivered.
        """

        return self.notifications.subscribe(_match(topic, device_address), callback)


    def register(self, callback, topic=None, device_address=None):
        """ Register a *callback* invoked for each matching notification, on
            the thread delivering notifications; it should be lightweight.
            If no *topic* is specified the callback sees every notification.
            The returned subscription can be closed to stop the callbacks.
        """

        if callable(callback):
            pass
        else:
            raise TypeError('callback must be callable')

        if topic is None and device_address is None:
            return self.notifications.subscribe(callback=callback)

        return self.notifications.subscribe(_match(topic, device_address), callback)


    def subscribers(self):
        """ Return the number of active subscriptions.
        """

        return len(self.notifications)


# end of class NotificationDemuxer



def _match(topic, device_address):

    if topic is not None:
        topic = str(topic)

    def matches(notification):
        if topic is not None and notification.topic != topic:
            return False
        if device_address is not None and notification.device_address != device_address:
            return False
        return True

    return matches


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:

import mmclient
import pytest


class Responder:
    """ Stand-in for Motion Master on the far side of a Client's send
        callable. Every frame sent is decoded and kept; requests other than
        pings are answered synchronously, before send() returns, which is
        the fastest a reply could ever arrive.
    """

    def __init__(self, devices=None, answer=True):

        self.client = None
        self.answer = answer
        self.sent = list()

        if devices is None:
            devices = list()

        self.devices = devices


    def __call__(self, data):

        request = mmclient.json.loads(data)
        self.sent.append(request)

        if self.client is None or self.answer == False:
            return

        if request['kind'] == mmclient.protocol.fields.PING_SYSTEM:
            return

        reply = self.reply(request)
        self.client.receive(mmclient.json.dumps(reply))


    def reply(self, request):

        fields = mmclient.protocol.fields
        payload = dict()

        if request['kind'] == fields.GET_DEVICE_INFO:
            kind = fields.DEVICE_INFO
            payload[fields.DEVICES] = self.devices
        elif request['kind'] == fields.GET_SYSTEM_VERSION:
            kind = fields.SYSTEM_VERSION
            payload['version'] = '1.2.3'
        else:
            kind = request['kind']
            payload.update(request['payload'])

        return {'id': request['id'], 'kind': kind, 'payload': payload}


    def kinds(self):
        return [request['kind'] for request in self.sent]


# end of class Responder



@pytest.fixture
def responder():
    return Responder(devices=[{'deviceAddress': 1234, 'position': 0},
                              {'deviceAddress': 5678, 'position': 1}])


@pytest.fixture
def client(responder):

    client = mmclient.Client(responder)
    responder.client = client

    yield client

    client.shutdown()


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:

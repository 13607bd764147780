"""
SOAP 1.2 envelopes for the eSocial web services.

The static text of each envelope must match what the eSocial WSDL expects
byte for byte. Field values are inserted verbatim, without XML escaping.
"""
from __future__ import annotations

import re

from .models import Action, RelayRequest

QUERY_SOAP_ACTION = (
    "http://www.esocial.gov.br/servicos/empregador/consulta/retornoProcessamento/"
    "v1_0_0/ServicoConsultarLoteEventos/ConsultarLoteEventos"
)
DOWNLOAD_SOAP_ACTION = (
    "http://www.esocial.gov.br/servicos/empregador/download/v1_0_0/ServicoDownload/Download"
)

# Tracking protocol for the batch query; callers cannot supply their own yet.
QUERY_PROTOCOL = "1"

QUERY_ENVELOPE = """<?xml version="1.0" encoding="utf-8"?>
<soap:Envelope xmlns:soap="http://www.w3.org/2003/05/soap-envelope" xmlns:v1="http://www.esocial.gov.br/servicos/empregador/consulta/retornoProcessamento/v1_0_0">
  <soap:Header/>
  <soap:Body>
    <v1:ConsultarLoteEventos>
      <v1:consulta>
        <eSocial xmlns="http://www.esocial.gov.br/schema/consulta/retornoProcessamento/v1_0_0">
          <consultaLoteEventos>
            <protocoloEnvio>{protocol}</protocoloEnvio>
          </consultaLoteEventos>
        </eSocial>
      </v1:consulta>
    </v1:ConsultarLoteEventos>
  </soap:Body>
</soap:Envelope>"""

DOWNLOAD_ENVELOPE = """<?xml version="1.0" encoding="utf-8"?>
<soap:Envelope xmlns:soap="http://www.w3.org/2003/05/soap-envelope" xmlns:v1="http://www.esocial.gov.br/servicos/empregador/download/v1_0_0">
  <soap:Header/>
  <soap:Body>
    <v1:SolicitarDownloadEventos>
      <v1:solicitacao>
        <eSocial xmlns="http://www.esocial.gov.br/schema/download/solicitacao/v1_0_0">
          <download>
            <ideEmpregador>
              <tpInsc>{tp_insc}</tpInsc>
              <nrInsc>{nr_insc}</nrInsc>
            </ideEmpregador>
            <solicDownload>
              <perApur>{per_apur}</perApur>
              <tpEvento>{tp_evento}</tpEvento>
            </solicDownload>
          </download>
        </eSocial>
      </v1:solicitacao>
    </v1:SolicitarDownloadEventos>
  </soap:Body>
</soap:Envelope>"""

_NON_DIGITS = re.compile(r"\D")


def normalize_registration_number(value: str) -> str:
    """Strip non-digits and keep the 8-digit root of the registration number."""
    return _NON_DIGITS.sub("", value)[:8]


def soap_action(action: Action) -> str:
    """SOAPAction header value that dispatches the remote operation."""
    return QUERY_SOAP_ACTION if action == Action.QUERY else DOWNLOAD_SOAP_ACTION


def build_envelope(request: RelayRequest) -> str:
    """Complete SOAP document for the request's action."""
    if request.action == Action.QUERY:
        return QUERY_ENVELOPE.format(protocol=QUERY_PROTOCOL)

    return DOWNLOAD_ENVELOPE.format(
        tp_insc=request.registration_type,
        nr_insc=normalize_registration_number(request.registration_number),
        per_apur=request.reporting_period,
        tp_evento=request.event_type,
    )
